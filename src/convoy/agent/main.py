"""Main agent implementation."""

import asyncio
import logging
import signal
import sys
from typing import Optional

from watchfiles import awatch

from convoy.agent.config import ConfigError, ConfigManager
from convoy.agent.engine import ReconcileEngine
from convoy.agent.source import ConfigSourceError
from convoy.models.config import AgentConfig
from convoy.models.state import DesiredState
from convoy.runtime.base import RuntimeClient, RuntimeClientError
from convoy.runtime.docker import DockerRuntimeClient


logger = logging.getLogger(__name__)


class ConvoyAgent:
    """Main agent: reloads the configuration and runs reconciliation passes."""

    def __init__(self, config: AgentConfig, client: Optional[RuntimeClient] = None):
        """Initialize the agent."""
        self.config = config
        self.client = client
        self.config_manager: Optional[ConfigManager] = None
        self.engine: Optional[ReconcileEngine] = None
        self.desired: Optional[DesiredState] = None
        self.shutdown_event = asyncio.Event()
        self._wake_event = asyncio.Event()
        self._applied_fingerprint: Optional[str] = None
        self._tasks: list[asyncio.Task] = []

    async def initialize(self):
        """Load the configuration and connect to the runtime.

        Raises ConfigSourceError, ConfigError or RuntimeClientError; all of
        them are fatal at startup.
        """
        if not self.config.config_url:
            raise ConfigSourceError("No configuration locator given")

        self.config_manager = ConfigManager(self.config.config_url)
        self.desired = await self.config_manager.load()

        if self.client is None:
            client = DockerRuntimeClient(api_version=self.config.docker_api_version)
            await client.connect()
            self.client = client

        self.engine = ReconcileEngine(self.client, self.config)
        logger.info("Agent initialized successfully")

    async def run(self):
        """Run the agent main loop until a shutdown signal."""
        await self.initialize()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self.shutdown)

        try:
            if self.config.watch and self.config_manager.locator.is_file:
                self._tasks.append(asyncio.create_task(self._config_watch_loop()))

            logger.info(f"Agent started, reconciling every {self.config.poll_interval}s")
            await self._reconciliation_loop()
        finally:
            await self._cleanup()

    async def run_once(self):
        """Load the configuration and run a single pass.

        Unlike the loop, a failing pass raises to the caller.
        """
        await self.initialize()
        try:
            await self._reconcile(self.desired)
        finally:
            await self._cleanup()

    async def _reconciliation_loop(self):
        """Run passes until shutdown; the first pass uses the startup load."""
        first = True
        while not self.shutdown_event.is_set():
            if not first:
                await self._reload()
            first = False

            try:
                await self._reconcile(self.desired)
            except RuntimeClientError as e:
                logger.error(f"Reconciliation pass aborted: {e}")
            except Exception as e:
                logger.error(f"Reconciliation error: {e}", exc_info=True)

            await self._wait_for_next_pass(self.config.poll_interval)

    async def _reload(self):
        """Reload the configuration, keeping the last good state on failure."""
        try:
            self.desired = await self.config_manager.load()
        except (ConfigSourceError, ConfigError) as e:
            logger.error(f"Failed to reload configuration, keeping previous state: {e}")

    async def _reconcile(self, desired: DesiredState):
        fingerprint = desired.fingerprint()
        remove_existing = (
            self.config.recreate == "always" or fingerprint != self._applied_fingerprint
        )
        if not remove_existing:
            logger.debug("Configuration unchanged, keeping existing containers")
        await self.engine.reconcile(desired, remove_existing=remove_existing)
        # Only a completed pass counts as applied.
        self._applied_fingerprint = fingerprint

    async def _wait_for_next_pass(self, interval: float):
        """Sleep until the interval elapses, a config change, or shutdown."""
        waiters = [
            asyncio.create_task(self.shutdown_event.wait()),
            asyncio.create_task(self._wake_event.wait()),
        ]
        try:
            await asyncio.wait(waiters, timeout=interval, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                waiter.cancel()
            await asyncio.gather(*waiters, return_exceptions=True)
        if self._wake_event.is_set():
            logger.info("Configuration changed, reconciling early")
            self._wake_event.clear()

    async def _config_watch_loop(self):
        """Watch a local configuration file for changes."""
        path = self.config_manager.locator.path
        logger.info(f"Starting config watcher on {path}")
        try:
            async for _changes in awatch(path, stop_event=self.shutdown_event):
                self._wake_event.set()
        except Exception as e:
            if not self.shutdown_event.is_set():
                logger.error(f"Config watch error: {e}", exc_info=True)

    def shutdown(self):
        """Signal shutdown."""
        logger.info("Shutdown requested")
        self.shutdown_event.set()

    async def _cleanup(self):
        """Clean up resources."""
        for task in self._tasks:
            if not task.done():
                task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

        if self.client is not None:
            await self.client.close()
        logger.info("Agent stopped")


async def run_agent(config: AgentConfig, once: bool = False):
    """Run the agent, exiting the process on fatal startup errors."""
    agent = ConvoyAgent(config)
    try:
        if once:
            await agent.run_once()
        else:
            await agent.run()
    except (ConfigSourceError, ConfigError) as e:
        logger.critical(f"Cannot load configuration: {e}")
        sys.exit(1)
    except RuntimeClientError as e:
        logger.critical(f"Container runtime error: {e}")
        sys.exit(1)
