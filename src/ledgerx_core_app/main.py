from __future__ import annotations

import logging

from ledgerx_core_app.app.bootstrap import CoreAppBootstrap
from ledgerx_core_app.app.state import Route
from ledgerx_core_app.config import load_core_app_config


def run() -> int:
    app_config = load_core_app_config()
    logging.basicConfig(
        level=app_config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    bootstrap = CoreAppBootstrap(app_config=app_config)
    result = bootstrap.start()
    if result.route is Route.LOGIN:
        print("LedgerX POS listo: inicie sesión.")
    else:
        print("LedgerX POS cargado.")
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
