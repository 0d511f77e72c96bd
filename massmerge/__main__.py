"""Allow ``python -m massmerge``."""

from massmerge.main import run

if __name__ == "__main__":
    run()
