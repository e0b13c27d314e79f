"""Social network analytics over users documents.

Key Components:
    SocialNetwork: Users, their posts and followers extracted from the tag tree
    analytics: Influence, activity, mutual-follower, suggestion and post search queries
    graph: Follower graph export to Graphviz DOT and image rendering
"""

from .analytics import (
    most_active,
    most_influencer,
    mutual_followers,
    render_posts,
    render_topic_search,
    render_user,
    render_users,
    render_word_search,
    search_posts_by_topic,
    search_posts_by_word,
    suggest_users,
)
from .graph import FollowerGraph, GraphRenderError, build_graph, export_dot, render_graph
from .network import (
    EmptyNetworkError,
    Post,
    SocialNetwork,
    SocialNetworkError,
    UnknownUserError,
    User,
    build_network,
    network_from_tree,
)

__all__ = [
    "EmptyNetworkError",
    "FollowerGraph",
    "GraphRenderError",
    "Post",
    "SocialNetwork",
    "SocialNetworkError",
    "UnknownUserError",
    "User",
    "build_graph",
    "build_network",
    "export_dot",
    "most_active",
    "most_influencer",
    "mutual_followers",
    "network_from_tree",
    "render_graph",
    "render_posts",
    "render_topic_search",
    "render_user",
    "render_users",
    "render_word_search",
    "search_posts_by_topic",
    "search_posts_by_word",
    "suggest_users",
]
