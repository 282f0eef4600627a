"""Allow running CLI as: python -m video_brain.cli"""

import sys

from .main import main

sys.exit(main())
