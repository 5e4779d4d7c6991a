import logging

logger = logging.getLogger("wsbench")
