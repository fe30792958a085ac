"""Blog: a small traversal tree.

Demonstrates literal and named segments, record lookup by id and by
field, positional captures from a compiled regex, and listening to
traversal events at the root.

Run:
    python app.py /posts/2
"""

import re
import sys
from dataclasses import dataclass

from perch import Node, RootNode
from perch.data import Collection
from perch.events import NodeEvent, TraversalFailed


@dataclass(frozen=True, slots=True)
class Post:
    id: int
    slug: str
    title: str


@dataclass(frozen=True, slots=True)
class Author:
    id: int
    handle: str
    name: str


posts = Collection(
    [
        Post(id=1, slug="hello-world", title="Hello, World"),
        Post(id=2, slug="segments", title="Thinking in Segments"),
    ]
)

authors = Collection([Author(id=7, handle="ada", name="Ada")])


root = RootNode(
    template="<h1>Blog</h1>",
    children=[
        Node(
            url_match="posts",
            template="<ul>{% for post in data_source %}<li>{{ post.title }}</li>{% end %}</ul>",
            collection=posts,
            children=Node(
                url_match=":id",
                collection=posts,
                template=(
                    "{% if record %}<article>{{ record.title }}</article>"
                    "{% else %}<p>Not found</p>{% end %}"
                ),
            ),
        ),
        Node(
            url_match="authors",
            auto_render=False,
            children=Node(
                url_match=":handle",
                collection=authors,
                auto_render=True,
                template="<p>{{ record.name }}</p>",
            ),
        ),
        Node(
            url_match=re.compile(r"^archive-(\d{4})-(\d{2})$"),
            kwarg_keys=("year",),
            template="<p>Archive {{ year }}</p>",
        ),
    ],
)


def log_failures(event: NodeEvent) -> None:
    if isinstance(event, TraversalFailed):
        print(f"no route below {event.node!r} for {'/'.join(event.remaining)}", file=sys.stderr)


root.subscribe(log_failures)


if __name__ == "__main__":
    traversal = root.visit(sys.argv[1] if len(sys.argv) > 1 else "/")
    if traversal.rendered is not None:
        print(traversal.rendered)
