from __future__ import annotations

import pytest

from lldb_gud.config import (
    ENV_PROMPT,
    ENV_STEP_PREFIX,
    ENV_SYNTHESIZE_PROMPT,
    FilterConfig,
    FilterConfigError,
)
from lldb_gud.filter import StreamFilter


def test_defaults():
    config = FilterConfig()
    assert config.prompt == "(lldb) "
    assert config.step_prefix == "step"
    assert config.synthesize_prompt is True
    config.validate()


def test_from_env_reads_overrides():
    env = {ENV_PROMPT: "(gdb) ", ENV_STEP_PREFIX: "trace", ENV_SYNTHESIZE_PROMPT: "off"}
    config = FilterConfig.from_env(env)
    assert config.prompt == "(gdb) "
    assert config.step_prefix == "trace"
    assert config.synthesize_prompt is False


def test_from_env_ignores_empty_values():
    assert FilterConfig.from_env({ENV_PROMPT: ""}) == FilterConfig()


def test_from_env_rejects_bad_boolean():
    with pytest.raises(FilterConfigError):
        FilterConfig.from_env({ENV_SYNTHESIZE_PROMPT: "maybe"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"prompt": ""},
        {"prompt": "(lldb)\n"},
        {"step_prefix": ""},
    ],
)
def test_validate_rejects_unusable_values(kwargs):
    with pytest.raises(FilterConfigError):
        FilterConfig(**kwargs).validate()


def test_filter_validates_config():
    with pytest.raises(FilterConfigError):
        StreamFilter(FilterConfig(prompt=""))


def test_merged_skips_none():
    config = FilterConfig().merged(prompt=None, step_prefix="next", synthesize_prompt=None)
    assert config.prompt == "(lldb) "
    assert config.step_prefix == "next"
    assert config.synthesize_prompt is True
