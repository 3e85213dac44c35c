"""
Markdown rendering with entity mentions.

The text is converted to a document tree first; mention tagging then walks the
tree's text and tail strings only, so attribute values and markup are never
rewritten. Each mention becomes `<span class="mention" data-node-id="...">`,
which the UI turns into a selection control.
"""

import re
import xml.etree.ElementTree as etree
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Pattern, Tuple

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from rdf_explorer.models import Node

Alias = Tuple[str, str]


@dataclass(frozen=True)
class Mention:
    text: str
    node_id: str


@dataclass
class RenderedMarkdown:
    html: str
    mentions: List[Mention] = field(default_factory=list)

    @property
    def node_ids(self) -> List[str]:
        seen = []
        for mention in self.mentions:
            if mention.node_id not in seen:
                seen.append(mention.node_id)
        return seen


def mention_aliases(nodes: Iterable[Node]) -> List[Alias]:
    """(alias, node id) pairs, longest alias first; a repeated alias keeps its first owner."""
    entries = []
    for node in nodes:
        entries.append((node.id, node.id))
        entries.append((node.label, node.id))
    entries = [e for e in entries if e[0] and len(e[0]) > 1]
    entries.sort(key=lambda e: len(e[0]), reverse=True)
    aliases, seen = [], set()
    for key, node_id in entries:
        if key in seen:
            continue
        seen.add(key)
        aliases.append((key, node_id))
    return aliases


def compile_aliases(aliases: List[Alias]) -> Optional[Pattern]:
    if not aliases:
        return None
    alternatives = "|".join(re.escape(key) for key, _ in aliases)
    return re.compile(rf"(?<![A-Za-z0-9])({alternatives})(?![A-Za-z0-9])")


class MentionTreeprocessor(Treeprocessor):
    def __init__(self, md, aliases: List[Alias]):
        super().__init__(md)
        self.lookup = dict(aliases)
        self.pattern = compile_aliases(aliases)
        self.mentions: List[Mention] = []

    def run(self, root):
        self.mentions = []
        if self.pattern is None:
            return None
        skipped = set()
        for link in root.iter("a"):
            skipped.update(link.iter())
        for parent in list(root.iter()):
            if parent in skipped:
                continue
            children = list(parent)
            if parent.text:
                parent.text, spans = self._tag(parent.text)
                for offset, span in enumerate(spans):
                    parent.insert(offset, span)
            for child in children:
                if not child.tail:
                    continue
                child.tail, spans = self._tag(child.tail)
                position = list(parent).index(child) + 1
                for offset, span in enumerate(spans):
                    parent.insert(position + offset, span)
        return None

    def _tag(self, text: str):
        """Split text into its leading run and mention spans (each carrying its trailing text)."""
        spans = []
        leading = None
        cursor = 0
        for match in self.pattern.finditer(text):
            chunk = text[cursor:match.start()]
            if spans:
                spans[-1].tail = chunk
            else:
                leading = chunk
            node_id = self.lookup[match.group(1)]
            span = etree.Element("span", {"class": "mention", "data-node-id": node_id})
            span.text = match.group(1)
            spans.append(span)
            self.mentions.append(Mention(text=match.group(1), node_id=node_id))
            cursor = match.end()
        if not spans:
            return text, spans
        spans[-1].tail = text[cursor:]
        return leading, spans


class MentionExtension(Extension):
    def __init__(self, aliases: List[Alias], **kwargs):
        self.aliases = aliases
        self.processor: Optional[MentionTreeprocessor] = None
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        self.processor = MentionTreeprocessor(md, self.aliases)
        # After inline patterns (20) so text nodes are final, before prettify (10).
        md.treeprocessors.register(self.processor, "entity_mentions", 15)


def render_markdown(text: str, nodes: Optional[Iterable[Node]] = None) -> RenderedMarkdown:
    extension = MentionExtension(mention_aliases(nodes or []))
    html = markdown.markdown(text, extensions=[extension])
    return RenderedMarkdown(html=html, mentions=list(extension.processor.mentions))
