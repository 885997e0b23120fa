import logging

LOGGER = logging.getLogger("dragcube")
