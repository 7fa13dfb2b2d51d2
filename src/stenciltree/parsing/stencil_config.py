"""
Stencil Config Parser for stenciltree.

Reads `stencil.config.ts` (or its JavaScript equivalent) and pulls out the
path of the `docs.json` output target without executing the file:

    export const config: Config = {
      namespace: 'my-lib',
      outputTargets: [
        { type: 'dist' },
        { type: 'docs-json', file: 'docs/docs.json' },
      ],
    };

The source is parsed with tree-sitter and matched structurally. Anything
else in the file (imports, plugins, computed values) is ignored.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from tree_sitter import Node as TSNode
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from ..config import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

CONFIG_VARIABLE_NAME = "config"
OUTPUT_TARGETS_KEY = "outputTargets"
DOCS_JSON_TARGET_TYPE = "docs-json"

TYPESCRIPT_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts")

DECLARATION_TYPES = ("lexical_declaration", "variable_declaration")
KEY_TYPES = ("property_identifier", "string")

SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def language_for(file_path: Path) -> str:
    """Pick the tree-sitter grammar for a config file."""
    if file_path.suffix.lower() in TYPESCRIPT_EXTENSIONS:
        return "typescript"
    return "javascript"


class StencilConfigExtractor:
    """
    Extracts the `docs-json` output target's `file` value from a Stencil config.

    Every failure (syntax errors, unexpected shapes, unreadable files)
    yields an empty string.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding
        self._parsers: Dict[str, Parser] = {}

    def extract_file(self, file_path: Union[str, Path]) -> str:
        """
        Read a config file and extract the docs.json path it declares.

        Args:
            file_path: Path to `stencil.config.ts` (or `.js`).

        Returns:
            str: The declared relative path, or "" if none was found.
        """
        file_path = Path(file_path)
        try:
            source = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {file_path}: {e}")
            return ""

        return self.extract(source, language=language_for(file_path))

    def extract(self, source: Union[str, bytes], language: str = "typescript") -> str:
        """
        Extract the docs.json path from config source text.

        Args:
            source: The configuration source.
            language: Tree-sitter grammar name ("typescript" or "javascript").

        Returns:
            str: The `file` value of the last matching `docs-json` target,
            or "" if there is none.
        """
        content = source.encode(self.encoding) if isinstance(source, str) else source
        tree = self._get_parser(language).parse(content)
        root = tree.root_node

        if root.has_error:
            logger.debug(f"Stencil config has syntax errors; ignoring ({language})")
            return ""

        docs_json_path = ""
        for config_object in self._config_objects(root):
            found = self._docs_json_path_in(config_object)
            if found is not None:
                docs_json_path = found

        return docs_json_path

    def _get_parser(self, language: str) -> Parser:
        """Initialize tree-sitter parsers lazily, one per grammar."""
        if language not in self._parsers:
            self._parsers[language] = get_parser(language)
        return self._parsers[language]

    def _config_objects(self, root: TSNode) -> Iterator[TSNode]:
        """Yield the object literal bound to `config` in each top-level declaration."""
        for statement in root.named_children:
            declaration = statement
            if statement.type == "export_statement":
                declaration = statement.child_by_field_name("declaration")
            if declaration is None or declaration.type not in DECLARATION_TYPES:
                continue

            declarators = [c for c in declaration.named_children if c.type == "variable_declarator"]
            if not declarators:
                continue

            # Only the first declarator of a statement is considered
            declarator = declarators[0]
            name = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")

            if name is None or name.type != "identifier" or _text(name) != CONFIG_VARIABLE_NAME:
                continue
            if value is None or value.type != "object":
                continue

            yield value

    def _docs_json_path_in(self, config_object: TSNode) -> Optional[str]:
        """Scan `outputTargets` for docs-json entries; the last one wins."""
        output_targets = _find_property(config_object, OUTPUT_TARGETS_KEY)
        if output_targets is None or output_targets.type != "array":
            return None

        docs_json_path = None
        for element in output_targets.named_children:
            if element.type != "object":
                continue

            target_type = _find_property(element, "type")
            if target_type is None or target_type.type != "string":
                continue
            if _string_value(target_type) != DOCS_JSON_TARGET_TYPE:
                continue

            for key, value in _properties(element):
                if key != "file":
                    continue
                if value.type == "string":
                    docs_json_path = _string_value(value)
                else:
                    # Computed or template paths are kept verbatim
                    docs_json_path = _text(value)

        return docs_json_path


def _text(node: TSNode) -> str:
    return node.text.decode(DEFAULT_ENCODING)


def _string_value(node: TSNode) -> str:
    """Decoded value of a string literal node."""
    parts = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(_text(child))
        elif child.type == "escape_sequence":
            parts.append(_unescape(_text(child)))
    return "".join(parts)


def _unescape(sequence: str) -> str:
    """Decode one JS escape sequence such as `\\n`, `\\x41`, `\\u{1F600}` or `\\'`."""
    body = sequence[1:]
    if body in SIMPLE_ESCAPES:
        return SIMPLE_ESCAPES[body]
    if body.startswith("u{"):
        return chr(int(body[2:-1], 16))
    if body[0] in "ux" and len(body) > 1:
        return chr(int(body[1:], 16))
    if body[0] in "\r\n":
        # Line continuation
        return ""
    return body


def _properties(obj: TSNode) -> Iterator[tuple]:
    """Yield (key, value node) for each `key: value` pair of an object literal."""
    for child in obj.named_children:
        if child.type != "pair":
            continue

        key = child.child_by_field_name("key")
        value = child.child_by_field_name("value")
        if key is None or value is None or key.type not in KEY_TYPES:
            continue

        name = _string_value(key) if key.type == "string" else _text(key)
        yield name, value


def _find_property(obj: TSNode, name: str) -> Optional[TSNode]:
    """Value node of the first property called `name`, if any."""
    for key, value in _properties(obj):
        if key == name:
            return value
    return None
