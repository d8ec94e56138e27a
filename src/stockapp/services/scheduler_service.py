"""
Scheduler Service

Single updater loop: every refresh interval, fetch each index of each
exchange and sync it to the store.
"""
import threading
from contextlib import nullcontext

from stockapp.config import setup_logger, REFRESH_INTERVAL

logger = setup_logger(name="Updater")


class UpdateScheduler:
    """
    Runs indexers on one background thread.

    Cancellation is checked before each tick, between indexers and while
    sleeping. A sync that has started is allowed to finish.
    """

    def __init__(self, indexers, refresh_interval=REFRESH_INTERVAL, app=None):
        self.indexers = list(indexers)
        self.refresh_interval = refresh_interval
        self.app = app
        self._cancel_event = threading.Event()
        self._thread = None
        self._closer = None
        self.ticks = 0

    @property
    def cancelled(self):
        return self._cancel_event.is_set()

    def cancel(self):
        """Request the loop to stop at its next safe point"""
        if not self.cancelled:
            logger.info("Updater cancellation requested")
        self._cancel_event.set()

    def run_once(self):
        """
        One tick over all indexers and their indexes.

        Returns:
            int: number of batches synced successfully
        """
        synced = 0
        for indexer in self.indexers:
            if self.cancelled:
                break
            try:
                index_names = indexer.get_exchange_indexes()
            except Exception:
                logger.exception(f"Could not list indexes of {indexer.exchange_code}, skipping")
                continue
            for index_name in index_names:
                try:
                    batch = indexer.fetch_index(index_name)
                    if not batch:
                        logger.warning(f"No data for {indexer.exchange_code} / {index_name}, skipping")
                        continue
                    if indexer.sync_to_data_store(batch):
                        synced += 1
                    else:
                        logger.warning(f"Sync failed for {indexer.exchange_code} / {index_name}")
                except Exception:
                    logger.exception(f"Unexpected error updating {indexer.exchange_code} / {index_name}")
        self.ticks += 1
        return synced

    def run(self):
        """Loop until cancelled. Blocks the calling thread."""
        logger.info(f"Updater started with {len(self.indexers)} indexers, refresh every {self.refresh_interval}s")
        context = self.app.app_context() if self.app is not None else nullcontext()
        with context:
            while not self.cancelled:
                synced = self.run_once()
                logger.info(f"Tick {self.ticks} done, {synced} batches synced")
                # wait() returns True as soon as cancel() is called
                if self._cancel_event.wait(self.refresh_interval):
                    break
        logger.info("Updater stopped")

    def start(self, deadline=None):
        """
        Start the loop thread, plus a closer timer when deadline (seconds) is given.
        """
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Updater is already running")

        self._thread = threading.Thread(target=self.run, name="stock-updater", daemon=True)
        self._thread.start()

        if deadline is not None:
            self._closer = threading.Timer(deadline, self.cancel)
            self._closer.daemon = True
            self._closer.start()
        return self._thread

    def join(self, timeout=None):
        if self._thread is not None:
            self._thread.join(timeout)
        if self._closer is not None and not self.is_alive():
            self._closer.cancel()

    def is_alive(self):
        return self._thread is not None and self._thread.is_alive()
