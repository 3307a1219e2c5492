import sys
from pathlib import Path

# Dynamically ensure the src/ layout is importable without an install
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
