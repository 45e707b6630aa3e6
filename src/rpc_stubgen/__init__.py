"""Schema-driven type and client stub generator."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
