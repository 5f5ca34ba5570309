"""
This __init__.py file makes the 'commands' directory a Python package.

`catalog` maps operation names to handlers; `params` holds the argument
models each handler is validated against.
"""
