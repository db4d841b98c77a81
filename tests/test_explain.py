"""Explanation service tests (fake client, no network)."""

from types import SimpleNamespace

import pytest

from aci211 import explain
from aci211.design import compute


class FakeMessages:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


def fake_client(**kwargs):
    return SimpleNamespace(messages=FakeMessages(**kwargs))


@pytest.fixture
def step_and_inputs(base_inputs):
    return compute(base_inputs).steps[3], base_inputs


def test_prompt_carries_context(step_and_inputs):
    step, inputs = step_and_inputs
    prompt = explain.build_prompt(step, inputs)
    assert 'Step 4: "Water-Cement Ratio"' in prompt
    assert "Target Strength: 4000 psi" in prompt
    assert "Exposure: Mild" in prompt
    assert "Step Result Value: w/c = 0.57" in prompt


def test_returns_model_text(step_and_inputs):
    step, inputs = step_and_inputs
    client = fake_client(text="  Lower w/c means higher strength.  ")
    assert explain.explain_step(step, inputs, client=client, model="test-model") == "Lower w/c means higher strength."
    call = client.messages.calls[0]
    assert call["model"] == "test-model"
    assert call["messages"][0]["role"] == "user"


def test_empty_text(step_and_inputs):
    step, inputs = step_and_inputs
    assert explain.explain_step(step, inputs, client=fake_client(text="")) == explain.EMPTY_MESSAGE


def test_failure_degrades_to_message(step_and_inputs, caplog):
    step, inputs = step_and_inputs
    client = fake_client(error=TimeoutError("timed out"))
    with caplog.at_level("WARNING", logger="aci211.explain"):
        assert explain.explain_step(step, inputs, client=client) == explain.ERROR_MESSAGE
    assert "step 4" in caplog.text


def test_no_api_key(step_and_inputs, monkeypatch):
    step, inputs = step_and_inputs
    monkeypatch.setattr(explain, "EXPLAIN_API_KEY", None)
    assert explain.explain_step(step, inputs) == explain.UNAVAILABLE_MESSAGE
