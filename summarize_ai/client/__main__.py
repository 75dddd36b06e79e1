import sys

from summarize_ai.client.cli import main

if __name__ == "__main__":
    sys.exit(main())
