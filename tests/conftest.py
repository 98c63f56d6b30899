# In repository root

import sys
from pathlib import Path

# Add repository root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))
