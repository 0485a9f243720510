#!/usr/bin/env python3
"""devdeploy - start a local OpenShift cluster and deploy the application onto it.

Usage:
    python devdeploy.py                              # Deploy into the default project
    python devdeploy.py --project demo --yes         # Recreate 'demo' without asking
    python devdeploy.py -p demo --tag=2.0            # Deploy templates tagged 2.0
    python devdeploy.py --memory 8192 --cpus 4       # Start a bigger cluster

Run 'python devdeploy.py --help' for more information.
"""

import sys
from pathlib import Path

# Add repository root to path for imports
root_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root_dir))

from devdeploy.cli import main

if __name__ == "__main__":
    main()
