import sys

from cube2oct.cli import main

if __name__ == "__main__":
    sys.exit(main())
