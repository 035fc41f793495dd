from app.services.keywords import english_stop_words, extract_keywords
from app.services.posts import PostService, matches_filters
from app.services.resolver import RelationshipResolver
from app.services.shaper import shape_post, shape_post_summary, snapshot_post

__all__ = [
    "PostService",
    "RelationshipResolver",
    "english_stop_words",
    "extract_keywords",
    "matches_filters",
    "shape_post",
    "shape_post_summary",
    "snapshot_post",
]
