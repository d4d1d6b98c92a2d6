from typing import Any, Dict

from ballmill.core.engine import DEFAULT_PARAMETERS


def default_params(**overrides: Any) -> Dict[str, Any]:
    """Form defaults as a plain dict, with overrides applied."""
    data = DEFAULT_PARAMETERS.model_dump()
    data.update(overrides)
    return data


def calc_payload(material_key: str = None, **overrides: Any) -> Dict[str, Any]:
    return {"parameters": default_params(**overrides), "material_key": material_key}
