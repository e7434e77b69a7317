"""
Command line summary of a glTF 2.0 document.

    python -m pygltfscene model.gltf
    python -m pygltfscene https://example.com/model.gltf --scene 0 -v
"""
import argparse
import logging
import sys

from pygltfscene import __version__
from pygltfscene.errors import GltfError
from pygltfscene.loader import load_gltf
from pygltfscene.settings import ParserSettings
from pygltfscene.types import Gltf, Matrix4, Node

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_ARENAS = (
    ("buffers", "Buffers"), ("buffer_views", "Buffer views"), ("accessors", "Accessors"),
    ("images", "Images"), ("samplers", "Samplers"), ("textures", "Textures"),
    ("materials", "Materials"), ("meshes", "Meshes"), ("cameras", "Cameras"),
    ("nodes", "Nodes"), ("scenes", "Scenes"),
)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pygltfscene",
                                     description="Parse a glTF 2.0 JSON document and print a summary.")
    parser.add_argument("source", help="path or http(s) URL of a .gltf document")
    parser.add_argument("--scene", type=int, default=None,
                        help="index of the scene to print (default: the document's default scene)")
    parser.add_argument("--no-byte-range-checks", action="store_true",
                        help="do not check buffer view and accessor byte ranges")
    parser.add_argument("--supported-extension", action="append", default=[], metavar="NAME",
                        help="extension the caller supports; with at least one given, "
                             "any other required extension is an error")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _print_tree(roots: list[Node], out):
    stack = [(root, Matrix4.create_identity(), 1) for root in reversed(roots)]
    while stack:
        node, parent_matrix, depth = stack.pop()
        world = parent_matrix * node.matrix
        parts = [node.name or "<unnamed>", f"at {world.translation}"]
        if node.mesh is not None:
            parts.append(f"mesh '{node.mesh.name}' ({len(node.mesh.primitives)} primitives)")
        if node.camera is not None:
            parts.append(f"camera '{node.camera.name}' ({node.camera.type.value})")
        print("  " * depth + "- " + ", ".join(parts), file=out)
        stack.extend((child, world, depth + 1) for child in reversed(node.children))


def print_summary(gltf: Gltf, scene_index: int | None = None, out=None):
    out = out if out is not None else sys.stdout
    asset = gltf.asset
    print(f"glTF {asset.version}" + (f" ({asset.generator})" if asset.generator else ""), file=out)
    for attr, label in _ARENAS:
        print(f"  {label}: {len(getattr(gltf, attr))}", file=out)
    if gltf.extensions_used:
        print(f"  Extensions used: {', '.join(gltf.extensions_used)}", file=out)
    if gltf.extensions_required:
        print(f"  Extensions required: {', '.join(gltf.extensions_required)}", file=out)

    if scene_index is not None:
        if not 0 <= scene_index < len(gltf.scenes):
            raise IndexError(f"scene {scene_index} does not exist ({len(gltf.scenes)} scenes)")
        scene = gltf.scenes[scene_index]
    else:
        scene = gltf.scene
    if scene is None:
        print("No scene selected.", file=out)
        return
    print(f"Scene '{scene.name}':", file=out)
    _print_tree(scene.nodes, out)


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)

    settings = ParserSettings(validate_byte_ranges=not args.no_byte_range_checks,
                              reject_unsupported_extensions=bool(args.supported_extension),
                              supported_extensions=args.supported_extension)
    try:
        gltf = load_gltf(args.source, settings)
        print_summary(gltf, args.scene)
    except (GltfError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
