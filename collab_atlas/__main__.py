import sys

from collab_atlas.cli import main

sys.exit(main())
