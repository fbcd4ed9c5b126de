"""Entry point for ``python -m markpress``."""

from markpress import main

if __name__ == "__main__":
    main()
