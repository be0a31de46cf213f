"""Tag index: tag name -> posts carrying it, in collection order"""

from mdsite.core.models import Post, TagIndex


def gather_tags(posts: list[Post]) -> TagIndex:
    """Append each post to the bucket of every tag it declares."""
    tags: TagIndex = {}
    for post in posts:
        for tag in dict.fromkeys(post.tags):
            tags.setdefault(tag, []).append(post)
    return tags
