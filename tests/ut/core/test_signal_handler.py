import signal

import pytest

from panser.core.helpers.utils import setup_signal_handler


@pytest.mark.ut
def test_first_signal_sets_the_stop_event():
    with setup_signal_handler() as stop_event:
        signal.raise_signal(signal.SIGTERM)
        assert stop_event.is_set()


@pytest.mark.ut
def test_second_signal_forces_the_exit():
    with pytest.raises(KeyboardInterrupt):
        with setup_signal_handler():
            signal.raise_signal(signal.SIGINT)
            signal.raise_signal(signal.SIGINT)


@pytest.mark.ut
def test_handlers_are_restored():
    before = signal.getsignal(signal.SIGTERM)

    with setup_signal_handler():
        assert signal.getsignal(signal.SIGTERM) is not before

    assert signal.getsignal(signal.SIGTERM) is before
