"""Unit tests for the reactive calculator state"""

import math
import pytest
from unittest.mock import Mock
from loanyfy.client import calculator_state
from loanyfy.client.calculator_state import CalculatorState
from loanyfy.client.scheduling import ManualFrameSource
from loanyfy.domain.amortization import compute


@pytest.fixture
def state(frames: ManualFrameSource) -> CalculatorState:
    return CalculatorState(frame_source=frames)


def test_defaults_are_computed_before_interaction(state: CalculatorState):
    assert state.inputs.principal == 500000
    assert state.inputs.term_months == 12
    assert state.inputs.annual_rate_percent == 16.99
    assert state.outputs == compute(500000, 12, 16.99)
    assert state.outputs.installment > 0


def test_default_widgets_are_synced(state: CalculatorState):
    assert state.principal_widgets.slider.value == state.principal_widgets.field.value == 500000
    assert state.term_widgets.slider.value == state.term_widgets.field.value == 12
    assert state.rate_widgets.slider.value == 16.99
    assert state.rate_widgets.field.value == "16.99"


def test_set_principal_updates_both_widgets(state: CalculatorState, frames: ManualFrameSource):
    assert state.set_principal("750000") is True

    assert state.inputs.principal == 750000
    assert state.principal_widgets.slider.value == 750000
    assert state.principal_widgets.field.value == 750000
    assert state.update_pending

    frames.tick()
    assert state.outputs == compute(750000, 12, 16.99)


def test_set_rate_formats_numeric_field(state: CalculatorState):
    state.set_rate(14.5)

    assert state.rate_widgets.slider.value == 14.5
    assert state.rate_widgets.field.value == "14.50"


def test_set_term_accepts_integral_strings(state: CalculatorState):
    assert state.set_term("24") is True
    assert state.inputs.term_months == 24
    assert isinstance(state.inputs.term_months, int)


@pytest.mark.parametrize("value", ["abc", "", None, 0, -5, "-1", math.nan, math.inf, True])
def test_invalid_values_are_ignored(state: CalculatorState, frames: ManualFrameSource, value):
    before = state.outputs

    assert state.set_principal(value) is False
    assert state.set_term(value) is False
    assert state.set_rate(value) is False

    assert state.inputs.principal == 500000
    assert state.principal_widgets.field.value == 500000
    assert state.term_widgets.slider.value == 12
    assert not state.update_pending
    assert frames.tick() == 0
    assert state.outputs is before


def test_fractional_term_is_ignored(state: CalculatorState):
    assert state.set_term(12.5) is False
    assert state.inputs.term_months == 12


def test_rapid_updates_coalesce_into_one_recompute(
    state: CalculatorState, frames: ManualFrameSource, monkeypatch
):
    """Dragging a slider through 50 values in one frame → one recompute, one notification"""
    spy = Mock(wraps=compute)
    monkeypatch.setattr(calculator_state, "compute", spy)
    notifications = []
    state.subscribe(lambda inputs, outputs: notifications.append(outputs))

    for amount in range(100000, 600000, 10000):
        state.set_principal(amount)

    assert spy.call_count == 0
    frames.tick()

    assert spy.call_count == 1
    assert len(notifications) == 1
    assert notifications[0] == compute(590000, 12, 16.99)


def test_updates_across_inputs_share_one_frame(state: CalculatorState, frames: ManualFrameSource):
    notifications = []
    state.subscribe(lambda inputs, outputs: notifications.append(outputs))

    state.set_principal(120000)
    state.set_term(12)
    state.set_rate(12)
    frames.tick()

    assert len(notifications) == 1
    assert notifications[0].installment == pytest.approx(10661.85, abs=0.01)


def test_flush_recomputes_pending_update(state: CalculatorState, frames: ManualFrameSource):
    state.set_term(36)

    outputs = state.flush()

    assert outputs == compute(500000, 36, 16.99)
    assert not state.update_pending
    assert frames.tick() == 0


def test_unsubscribe_stops_notifications(state: CalculatorState, frames: ManualFrameSource):
    notifications = []
    unsubscribe = state.subscribe(lambda inputs, outputs: notifications.append(outputs))
    unsubscribe()

    state.set_principal(200000)
    frames.tick()

    assert notifications == []


def test_as_payload_includes_fresh_outputs(state: CalculatorState):
    state.set_principal(120000)
    state.set_rate(12)

    payload = state.as_payload()

    assert payload["loanAmount"] == 120000
    assert payload["tenureMonths"] == 12
    assert payload["interestRate"] == 12
    assert payload["monthlyEmi"] == pytest.approx(10661.85, abs=0.01)
    assert payload["totalAmount"] == pytest.approx(payload["monthlyEmi"] * 12)
