"""Allow ``python -m backup_service``."""

from backup_service.cli.main import main

if __name__ == "__main__":
    main()
