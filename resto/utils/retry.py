# resto/utils/retry.py
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    wait_random,
    retry_if_exception_type,
    before_sleep_log,
)
import logging
import requests

from resto.domain.errors import TransientConflict
from resto.utils.settings import CHECKOUT_MAX_ATTEMPTS
from resto.utils.logging import get_logger

logger = get_logger(__name__)


def conflict_retry(attempts: int = CHECKOUT_MAX_ATTEMPTS):
    #whole checkout unit is re-run, short jitter so racing requests spread out
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_random(min=0.01, max=0.1),
        retry=retry_if_exception_type(TransientConflict),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )


def gateway_retry():
    #only connection errors: the gateway never saw the request so replaying is safe
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(requests.ConnectionError),
    )
