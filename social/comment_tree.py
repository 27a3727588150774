"""
Comment tree materialization.

Comments are stored flat, each with an optional ``parent_id``. Rendering a
post needs them nested, with every comment knowing how many replies sit
anywhere below it. ``build_comment_tree`` does that in memory from the
comments already prefetched for a post, so a whole timeline page costs
no extra queries.

Example:
    >>> nodes = build_comment_tree(post.comments.all())
    >>> nodes[0].comment.id, nodes[0].num_of_comments
    (42, 3)
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field


@dataclass
class CommentNode:
    """A comment together with its materialized replies."""

    comment: object
    children: list = field(default_factory=list)
    num_of_comments: int = 0

    @property
    def id(self):
        return self.comment.id


def build_comment_tree(comments, parent_id=None):
    """
    Nest a flat sequence of comments under ``parent_id``.

    Args:
        comments: Iterable of objects exposing ``id`` and ``parent_id``,
            in the order siblings should be displayed.
        parent_id: Root of the subtree to build. ``None`` builds the
            whole tree from top-level comments.

    Returns:
        list[CommentNode]: Direct children of ``parent_id`` in input
        order. Each node's ``num_of_comments`` counts all of its
        descendants, not only direct replies.

    Comments whose parent is missing from ``comments`` are unreachable
    and left out.
    """
    by_parent = defaultdict(list)
    for comment in comments:
        by_parent[comment.parent_id].append(comment)
    return _materialize(by_parent, parent_id, set())


def _materialize(by_parent, parent_id, seen):
    nodes = []
    for comment in by_parent.get(parent_id, ()):
        if comment.id in seen:
            continue
        seen.add(comment.id)
        children = _materialize(by_parent, comment.id, seen)
        total = len(children) + sum(child.num_of_comments for child in children)
        nodes.append(CommentNode(comment=comment, children=children, num_of_comments=total))
    return nodes


def subtree_ids(root_id, edges):
    """
    Ids of ``root_id`` and every comment below it.

    Args:
        root_id: Comment id the subtree starts at.
        edges: Iterable of ``(id, parent_id)`` pairs, typically
            ``post.comments.values_list('id', 'parent_id')``.

    Returns:
        list[int]: ``root_id`` first, then descendants breadth first.
    """
    children = defaultdict(list)
    for comment_id, parent_id in edges:
        children[parent_id].append(comment_id)

    ids = [root_id]
    seen = {root_id}
    queue = deque([root_id])
    while queue:
        current = queue.popleft()
        for child_id in children.get(current, ()):
            if child_id not in seen:
                seen.add(child_id)
                ids.append(child_id)
                queue.append(child_id)
    return ids
