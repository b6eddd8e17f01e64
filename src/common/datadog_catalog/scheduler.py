'''Task runners the provider hands its runs to'''
from typing import Callable, Protocol

from aws_lambda_powertools.logging import Logger

LOGGER = Logger(utc=True)


class TaskRunner(Protocol):
    '''Runs a provider task on the runner's own schedule'''
    def run(self, task_id: str, fn: Callable[[], None]) -> None: ...


class ImmediateTaskRunner:
    '''Run the task once, inline

    In Lambda the EventBridge schedule is the timer, so each invocation is a
    single tick of the task.
    '''
    def run(self, task_id: str, fn: Callable[[], None]) -> None:
        LOGGER.info('Running task {}'.format(task_id))
        fn()
