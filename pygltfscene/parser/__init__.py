# This file marks pygltfscene.parser as a Python package.

from .gltf_parser import GltfParser, parse, parse_document

__all__ = ["GltfParser", "parse", "parse_document"]
