import sys

from localshortener.cli import main


sys.exit(main())
