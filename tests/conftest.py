# tests/conftest.py
import sys
import os

# add the project root to sys.path so poker_equity imports without installing
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
