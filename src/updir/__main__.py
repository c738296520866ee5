"""Module entrypoint for ``python -m updir``."""

from updir.cli.main import main


if __name__ == "__main__":
    main()
