import dataclasses

from pygltfscene.structured_data import ExtraValue


# Entities compare by identity (eq=False) so the same accessor referenced by two
# primitives is recognisably one object and can be used as a dict key.

@dataclasses.dataclass(slots=True, eq=False)
class ExtensibleEntity:
    """Anything that may carry opaque ``extras`` and ``extensions`` payloads."""
    extras: ExtraValue | None = None
    extensions: dict[str, ExtraValue] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(slots=True, eq=False)
class NamedEntity(ExtensibleEntity):
    """Base for the top-level array entries, which may also be named."""
    name: str = ""

    def __str__(self):
        return f"{self.__class__.__name__}(Name='{self.name}')"
