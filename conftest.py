import os
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep tests off a developer's real task database and token from .env.
os.environ["DATABASE__URL"] = f"sqlite:///{Path(tempfile.mkdtemp()) / 'tasks-test.db'}"
os.environ.pop("REPORT_API_TOKEN", None)
