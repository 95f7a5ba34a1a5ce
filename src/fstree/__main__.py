from __future__ import annotations

import sys

from fstree.main import main

sys.exit(main())
