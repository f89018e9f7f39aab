import importlib
import traceback
from pathlib import Path
from typing import Any, Mapping, NotRequired, TypedDict

import structlog
import yaml

__all__ = [
    "Config",
    "ScenarioConfig",
    "import_name",
    "instantiate",
    "load_scenario",
]

log = structlog.get_logger(__name__)


class Config(TypedDict):
    """Configuration for dynamically instantiated objects."""

    code: str
    parameters: dict[str, Any]


DEFAULT_POLICY: Config = {
    "code": "mining_bandit.impl.policies.random_policy.RandomPolicy",
    "parameters": {},
}


class ScenarioConfig(TypedDict):
    """Contents of a scenario file."""

    bandit: Config
    policy: NotRequired[Config]
    steps: NotRequired[int]


def load_scenario(path: str | Path) -> ScenarioConfig:
    """Read a scenario YAML file, filling in the default policy."""
    with open(path, "r") as f:
        scenario = yaml.safe_load(f)

    if not isinstance(scenario, dict) or "bandit" not in scenario:
        raise ValueError(f"Scenario {str(path)!r} must define a 'bandit' block.")
    for key in ("bandit", "policy"):
        block = scenario.get(key)
        if block is None:
            continue
        if not isinstance(block, dict) or "code" not in block:
            raise ValueError(f"Scenario {str(path)!r}: {key!r} block must define 'code'.")
        block.setdefault("parameters", {})
    scenario.setdefault("policy", dict(DEFAULT_POLICY))
    log.debug("scenario_loaded", path=str(path), bandit_code=scenario["bandit"]["code"])
    return scenario


def instantiate(function_name: str, parameters: Mapping[str, Any]) -> Any:
    """Call the function or constructor at the dotted path with keyword parameters."""
    try:
        function = import_name(function_name)
    except ValueError as e:
        log.warning("instantiate_import_failed", function_name=function_name, error=str(e))
        raise ValueError(f"instantiate(): Cannot find the function or constructor {function_name!r}.") from e

    try:
        return function(**parameters)
    except TypeError as e:
        params = ", ".join(f"{k}={v!r}" for k, v in parameters.items())
        log.warning("instantiate_call_failed", function_name=function_name, params=list(parameters.keys()))
        msg = f"instantiate(): Could not call {function_name!r} with params {params}:\n{traceback.format_exc()}"
        raise ValueError(msg) from e


def import_name(name: str) -> Any:
    """Load the python object with the given dotted name.

    `name` may be a module, a module attribute, or an attribute of a class
    ("module.Class.factory").
    """
    try:
        return importlib.import_module(name)
    except ImportError:
        if "." not in name:
            raise ValueError(f"Cannot import name {name!r}.\n{traceback.format_exc()}")

    owner_name, field = name.rsplit(".", 1)
    try:
        owner = import_name(owner_name)
    except ValueError as e:
        raise ValueError(f"Cannot load {name!r} (tried also with {owner_name!r}).") from e

    if not hasattr(owner, field):
        raise ValueError(f"No field {field!r} found in {owner!r}.")
    return getattr(owner, field)
