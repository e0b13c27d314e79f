"""Queries over a SocialNetwork and their text renderings."""

from typing import Iterable, List, Sequence

from .network import EmptyNetworkError, Post, SocialNetwork, User


def most_influencer(network: SocialNetwork) -> User:
    """User with the most followers; ties go to the earliest user."""
    if not len(network):
        raise EmptyNetworkError("Network has no users")
    best = network.users[0]
    for user in network:
        if len(user.follower_ids) > len(best.follower_ids):
            best = user
    return best


def most_active(network: SocialNetwork) -> User:
    """User following the most other users; ties go to the earliest user."""
    if not len(network):
        raise EmptyNetworkError("Network has no users")
    following = {user.id: 0 for user in network}
    for user in network:
        for follower_id in user.follower_ids:
            if follower_id in following:
                following[follower_id] += 1

    best = network.users[0]
    for user in network:
        if following[user.id] > following[best.id]:
            best = user
    return best


def mutual_followers(network: SocialNetwork, user_ids: Sequence[str]) -> List[User]:
    """Users who follow every user in ``user_ids``, in document order."""
    if not user_ids:
        raise ValueError("At least one user id is required")
    follower_sets = [set(network.followers_of(user_id)) for user_id in user_ids]
    common = set.intersection(*follower_sets)
    return [user for user in network if user.id in common]


def suggest_users(network: SocialNetwork, user_id: str) -> List[User]:
    """Followers of the user's followers that the user is not already followed by."""
    direct = set(network.followers_of(user_id))
    suggested = set()
    for follower_id in direct:
        if follower_id in network:
            suggested.update(network.followers_of(follower_id))
    suggested -= direct
    suggested.discard(user_id)
    return [user for user in network if user.id in suggested]


def search_posts_by_word(network: SocialNetwork, word: str) -> List[Post]:
    """Posts whose body contains ``word``, ignoring case."""
    if not word.strip():
        raise ValueError("Search word cannot be empty")
    return [post for post in network.posts() if post.mentions(word.strip())]


def search_posts_by_topic(network: SocialNetwork, topic: str) -> List[Post]:
    """Posts tagged with ``topic``, ignoring case."""
    if not topic.strip():
        raise ValueError("Search topic cannot be empty")
    return [post for post in network.posts() if post.has_topic(topic)]


def render_user(title: str, user: User) -> str:
    return f"{title}: {user.label}\n"


def render_users(title: str, users: Iterable[User]) -> str:
    users = list(users)
    if not users:
        return f"{title}: none\n"
    lines = [f"{title} ({len(users)}):"]
    lines.extend(f"  - {user.label}" for user in users)
    return "\n".join(lines) + "\n"


def render_posts(posts: Sequence[Post], empty_message: str) -> str:
    if not posts:
        return empty_message
    output = f"Found {len(posts)} post(s):\n\n"
    for number, post in enumerate(posts, start=1):
        output += f"Post {number}:\n{post.body}\n---\n"
    return output


def render_word_search(posts: Sequence[Post], word: str) -> str:
    return render_posts(posts, f'No posts found containing: "{word}"')


def render_topic_search(posts: Sequence[Post], topic: str) -> str:
    return render_posts(posts, f'No posts found with topic: "{topic}"')
