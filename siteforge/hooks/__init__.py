"""Built-in build hooks for the stock components.

Each module exports ``build(vars, resolve, substitute) -> str``. A site can
replace any of them with its own ``components/<name>/<name>.build.py``.
"""
