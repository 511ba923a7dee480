"""Deterministic expansion of the ``margin`` shorthand.

The expander is a pure function over already-parsed values. Parsing CSS text
and validating how many values a stylesheet supplied both happen upstream;
see ``margin_shorthand.core.validate`` for the caller-side checks the CLI uses.
"""
