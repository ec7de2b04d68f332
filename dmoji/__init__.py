from pathlib import Path

__version__ = '0.2.0'

# Set when running from a source checkout instead of an installed copy
SOURCE_DIR = Path(__file__).resolve().parent.parent
IS_SOURCE_CHECKOUT = (SOURCE_DIR / 'setup.py').exists()
