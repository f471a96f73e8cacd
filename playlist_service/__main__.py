"""Allow ``python -m playlist_service``."""

import sys

from playlist_service.infrastructure.cli.app import main

sys.exit(main())
