import json
import logging
from functools import partial

from pygltfscene.errors import MalformedDocument, UnimplementedFeature
from pygltfscene.settings import ParserSettings
from pygltfscene.types import Gltf
from . import decoders
from .arrays import (
    decode_entity_array, decode_string_array, read_array, read_extensions,
    read_extras, read_object,
)

logger = logging.getLogger(__name__)

# Top-level keys the parser reads. Anything else is left alone.
_KNOWN_KEYS = frozenset((
    "asset", "extensionsUsed", "extensionsRequired", "buffers", "bufferViews", "images",
    "samplers", "textures", "materials", "accessors", "meshes", "cameras", "nodes",
    "skins", "animations", "scenes", "scene", "extras", "extensions",
))


class GltfParser:
    """
    Decodes a glTF 2.0 JSON document into a linked Gltf graph.

    Arrays are decoded in dependency order so every index reference points at
    an arena that is already complete. Node children are the one exception
    (a node may name a later node as its child) and get a second pass.
    """

    def __init__(self, settings: ParserSettings | None = None):
        self.settings = settings if settings is not None else ParserSettings()

    def parse(self, json_text: str | bytes, base_uri: str = "") -> Gltf:
        try:
            document = json.loads(json_text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedDocument(f"not valid JSON: {e}") from e
        except RecursionError as e:
            raise MalformedDocument("JSON nesting is too deep to decode") from e
        return self.parse_document(document, base_uri=base_uri)

    def parse_document(self, document: dict, base_uri: str = "") -> Gltf:
        if not isinstance(document, dict):
            raise MalformedDocument(f"top level must be an object, got {type(document).__name__}")

        root = Gltf(base_uri=base_uri)
        root.asset = decoders.decode_asset(read_object(document, "asset", "", required=True))
        self._decode_extension_lists(root, document)

        check_ranges = self.settings.validate_byte_ranges
        root.buffers = self._decode_array(document, "buffers", partial(decoders.decode_buffer, root))
        root.buffer_views = self._decode_array(
            document, "bufferViews",
            partial(decoders.decode_buffer_view, root, check_ranges=check_ranges))
        root.images = self._decode_array(document, "images", partial(decoders.decode_image, root))
        root.samplers = self._decode_array(document, "samplers", partial(decoders.decode_sampler, root))
        root.textures = self._decode_array(document, "textures", partial(decoders.decode_texture, root))
        root.materials = self._decode_array(document, "materials", partial(decoders.decode_material, root))
        root.accessors = self._decode_array(
            document, "accessors",
            partial(decoders.decode_accessor, root, check_ranges=check_ranges))
        root.meshes = self._decode_array(document, "meshes", partial(decoders.decode_mesh, root))
        root.cameras = self._decode_array(document, "cameras", partial(decoders.decode_camera, root))

        node_objects = read_array(document, "nodes", "") or []
        root.nodes = decode_entity_array(node_objects, "nodes", partial(decoders.decode_node, root))
        decoders.resolve_node_children(root.nodes, node_objects)
        decoders.check_node_hierarchy(root.nodes)
        logger.debug("Decoded %d nodes", len(root.nodes))

        if "skins" in document:
            raise UnimplementedFeature("skins")
        if "animations" in document:
            logger.debug("Ignoring 'animations'")

        root.scenes = self._decode_array(document, "scenes", partial(decoders.decode_scene, root))
        root.scene = decoders.decode_default_scene(root, document)

        root.extras = read_extras(document)
        root.extensions = read_extensions(document, "")

        ignored = [key for key in document if key not in _KNOWN_KEYS]
        if ignored:
            logger.debug("Ignoring unknown top-level keys: %s", ", ".join(ignored))
        return root

    def _decode_extension_lists(self, root: Gltf, document: dict):
        if "extensionsUsed" in document:
            root.extensions_used = decode_string_array(document["extensionsUsed"], "extensionsUsed")
        if "extensionsRequired" in document:
            root.extensions_required = decode_string_array(
                document["extensionsRequired"], "extensionsRequired")

        if self.settings.reject_unsupported_extensions:
            unsupported = self.settings.unsupported_required(root.extensions_required)
            if unsupported:
                index = root.extensions_required.index(unsupported[0])
                raise UnimplementedFeature(unsupported[0], f"extensionsRequired[{index}]")

    @staticmethod
    def _decode_array(document: dict, key: str, decoder) -> list:
        array = read_array(document, key, "")
        if array is None:
            return []
        result = decode_entity_array(array, key, decoder)
        logger.debug("Decoded %d %s", len(result), key)
        return result


def parse(json_text: str | bytes, *, base_uri: str = "", settings: ParserSettings | None = None) -> Gltf:
    """
    Parses glTF 2.0 JSON text into a Gltf graph.

    Raises a GltfError subclass on the first problem found; no partial graph
    is returned.
    """
    return GltfParser(settings).parse(json_text, base_uri=base_uri)


def parse_document(document: dict, *, base_uri: str = "",
                   settings: ParserSettings | None = None) -> Gltf:
    """Same as parse() for a document that was already loaded with json.loads()."""
    return GltfParser(settings).parse_document(document, base_uri=base_uri)
