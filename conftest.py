# Ensure project root is on sys.path for tests and keep battle text instant
import os, sys, pathlib
root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))
os.environ.setdefault("POKEDUEL_INSTANT_TEXT", "1")
