"""Run the bridge with uvicorn: ``python -m ghl_bridge.server`` or ``ghl-bridge``."""

import uvicorn

from ghl_bridge.gateway_core import GatewayConfig, setup_logging
from .app import create_app


def main() -> None:
    config = GatewayConfig.from_env()
    setup_logging(config.log_level, secrets=(config.bearer_token, config.gemini_api_key))
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
