# provably_fair/exceptions.py


class FairnessError(Exception):
    pass


class ConfigurationError(FairnessError, ValueError):
    """Invalid seeds, nonce, board, target or bet parameters."""


class EntropyError(FairnessError, RuntimeError):
    """The operating system could not supply secure randomness."""
