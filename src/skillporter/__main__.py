# Allow running as `python -m skillporter`
import sys

from skillporter.cli import main

sys.exit(main())
