"""
Tests for Timer.
"""

import pytest

from lmstep.core.compute.timing import Timer


class TestTimer:

    def test_sections_reported(self):
        timer = Timer()
        timer.start()
        with timer.section('solve'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'solve'}
        assert result['total_seconds'] >= 0.0

    def test_repeated_section_accumulates(self):
        timer = Timer()
        timer.start()
        with timer.section('fit'):
            pass
        first = timer._phases['fit']
        with timer.section('fit'):
            pass
        timer.stop()
        assert timer.result()['fit'] >= first

    def test_section_recorded_on_error(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ValueError):
            with timer.section('broken'):
                raise ValueError("boom")
        timer.stop()
        assert 'broken' in timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError, match="before start"):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError, match="before stop"):
            timer.result()

