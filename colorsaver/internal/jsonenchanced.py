import json, dataclasses, pydantic
from typing_extensions import override

from colorsaver.internal.color_codec import CanonicalColor


class EnhancedJSONEncoder(json.JSONEncoder):
    @override
    def default(self, o):
        if isinstance(o, CanonicalColor):
            return str(o)

        if isinstance(o, pydantic.BaseModel):
            return o.model_dump(mode="json")

        # shallow, nested colors come back through default()
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            return {f.name: getattr(o, f.name) for f in dataclasses.fields(o)}
        return super().default(o)
