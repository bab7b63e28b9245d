"""Agent entry point for running the convoy agent from the environment."""

import asyncio
import os
import sys

from convoy.agent.main import run_agent
from convoy.models.config import AgentConfig
from convoy.utils.logging import setup_logging


def main():
    """Run the convoy agent."""
    config = AgentConfig(
        config_url=os.environ.get("CONVOY_CONFIG_URL") or os.environ.get("AGENT_CFG_URL"),
        log_level=os.environ.get("CONVOY_LOG_LEVEL", "INFO"),
    )
    setup_logging(config.log_level)
    try:
        asyncio.run(run_agent(config))
    except KeyboardInterrupt:
        print("\nAgent shutdown requested")
        sys.exit(0)


if __name__ == "__main__":
    main()
