# this_file: rasterize_text/__main__.py
"""Allow ``python -m rasterize_text``."""

from .cli import main

if __name__ == "__main__":
    main()
