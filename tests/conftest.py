import sys
from pathlib import Path

# Tests run against the src/ tree without requiring an install.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

TESTS_PATH = Path(__file__).resolve().parent
if str(TESTS_PATH) not in sys.path:
    # Makes the in-memory host in fakehost.py importable from every test module.
    sys.path.insert(0, str(TESTS_PATH))
