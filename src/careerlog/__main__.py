"""Allow ``python -m careerlog``."""

from careerlog.cli import main

if __name__ == "__main__":
    main()
