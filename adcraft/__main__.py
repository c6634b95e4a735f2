# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

import sys

from adcraft.cli import main

sys.exit(main())
