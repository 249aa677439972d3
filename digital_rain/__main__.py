"""Allow running as: python -m digital_rain"""

import sys

from .app import main

sys.exit(main())
