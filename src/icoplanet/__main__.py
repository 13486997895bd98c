"""Allow ``python -m icoplanet``."""

from .cli import main

if __name__ == "__main__":
    main()
