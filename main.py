"""
Booking widget entry point.

Signs the process in through the identity bootstrap and starts the console
front-end on top of the booking service.

Usage:
    Interactive:  python main.py
    Scripted:     python main.py --scenario booking
"""

import logging

from console_demo import main

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    logger.debug("Starting booking console")
    main()
