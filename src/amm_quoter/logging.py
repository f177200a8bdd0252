"""
The package logger. Quoting functions are silent; the oracle logs each applied operation at DEBUG,
and contract reads log retries and quote mismatches at WARNING.
"""

import logging

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))

logger = logging.getLogger("amm_quoter")
logger.propagate = False
logger.setLevel(logging.INFO)
logger.addHandler(_handler)
