import logging
import time

logger = logging.getLogger(__name__)


class DeferredTask:
    def __init__(self, due, callback, run_id):
        self.due = due
        self.callback = callback
        self.run_id = run_id
        self.cancelled = False
        self.fired = False

    @property
    def pending(self):
        return not (self.cancelled or self.fired)


class Scheduler:
    """One-shot delayed callbacks, polled from the frame loop.

    Each task carries the id of the run that scheduled it so a newer run can
    cancel whatever an older run left behind.
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.tasks = []

    def schedule(self, delay, callback, run_id):
        task = DeferredTask(self.clock() + delay, callback, run_id)
        self.tasks.append(task)
        logger.debug("Scheduled task for run %d in %.2fs", run_id, delay)
        return task

    def cancel_run(self, run_id):
        cancelled = 0
        for task in self.tasks:
            if task.run_id == run_id and task.pending:
                task.cancelled = True
                cancelled += 1
        if cancelled:
            logger.debug("Cancelled %d pending task(s) for run %d", cancelled, run_id)
        self.tasks = [t for t in self.tasks if t.pending]
        return cancelled

    def poll(self):
        """Fire every task that has come due, in due order."""
        now = self.clock()
        due = sorted((t for t in self.tasks if t.pending and t.due <= now), key=lambda t: t.due)
        for task in due:
            # A callback may cancel later tasks
            if not task.pending:
                continue
            task.fired = True
            logger.debug("Firing task for run %d", task.run_id)
            task.callback()
        self.tasks = [t for t in self.tasks if t.pending]
        return len(due)
