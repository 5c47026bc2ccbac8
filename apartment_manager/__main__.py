#!/usr/bin/env python3
"""Start the Apartment Management System."""

import logging

from .config import get_settings


def main():
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logging.getLogger(__name__).info("Using data directory %s", settings.data_dir.resolve())

    # tkinter is only needed once the window opens
    from .gui import ApartmentApp

    app = ApartmentApp(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
