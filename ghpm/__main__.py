"""Allow ``python -m ghpm``."""

from ghpm.cli.main import main

if __name__ == "__main__":
    main()
