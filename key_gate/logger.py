import logging

logger = logging.getLogger("key-gate")
