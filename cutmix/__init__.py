"""
CutMix: split recordings at silence and assemble clips into one mixdown.
"""
__version__ = "0.1.0"
