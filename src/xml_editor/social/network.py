"""Social network model extracted from a users document.

Expected document shape::

    <users>
      <user>
        <id>1</id>
        <name>Ahmed Ali</name>
        <posts>
          <post>
            <body>...</body>
            <topics><topic>economy</topic></topics>
          </post>
        </posts>
        <followers>
          <follower><id>2</id></follower>
        </followers>
      </user>
    </users>

Users are read from the tag tree, so documents with recoverable structural
problems still yield a network.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from xml_editor.shared import get_logger
from xml_editor.tree import XMLNode, build_tree


class SocialNetworkError(Exception):
    """Base exception for social network queries."""


class UnknownUserError(SocialNetworkError, KeyError):
    """Raised when a query references a user id absent from the network."""

    def __init__(self, user_id: str) -> None:
        super().__init__(user_id)
        self.user_id = user_id

    def __str__(self) -> str:
        return f"Unknown user id: {self.user_id}"


class EmptyNetworkError(SocialNetworkError):
    """Raised when a query needs at least one user and the network has none."""


@dataclass
class Post:
    """A post body with its topics."""

    body: str
    topics: List[str] = field(default_factory=list)

    def mentions(self, word: str) -> bool:
        return word.casefold() in self.body.casefold()

    def has_topic(self, topic: str) -> bool:
        wanted = topic.strip().casefold()
        return any(item.strip().casefold() == wanted for item in self.topics)


@dataclass
class User:
    """A network member and the ids of the users following them."""

    id: str
    name: str = ""
    posts: List[Post] = field(default_factory=list)
    follower_ids: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.name} (id: {self.id})" if self.name else f"id: {self.id}"


class SocialNetwork:
    """Users keyed by id in document order."""

    def __init__(self, users: Optional[List[User]] = None) -> None:
        self._users: Dict[str, User] = {}
        for user in users or []:
            self.add_user(user)

    def add_user(self, user: User) -> None:
        if user.id in self._users:
            raise ValueError(f"Duplicate user id: {user.id}")
        self._users[user.id] = user

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(self._users.values())

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    @property
    def users(self) -> List[User]:
        return list(self._users.values())

    def get(self, user_id: str) -> User:
        """Look up a user, raising UnknownUserError when absent."""
        try:
            return self._users[user_id]
        except KeyError:
            raise UnknownUserError(user_id) from None

    def followers_of(self, user_id: str) -> List[str]:
        return list(self.get(user_id).follower_ids)

    def following_of(self, user_id: str) -> List[str]:
        """Ids of the users that ``user_id`` follows, in document order."""
        self.get(user_id)
        return [user.id for user in self if user_id in user.follower_ids]

    def posts(self) -> Iterator[Post]:
        for user in self:
            yield from user.posts


def _read_post(node: XMLNode) -> Post:
    body_node = node.find_child("body")
    body = body_node.content if body_node is not None else node.content
    topics_node = node.find_child("topics")
    topics = (
        [topic.content for topic in topics_node.find_children("topic") if topic.content]
        if topics_node is not None
        else []
    )
    return Post(body=body, topics=topics)


def _read_user(node: XMLNode) -> User:
    user = User(id=node.child_text("id"), name=node.child_text("name"))

    posts_node = node.find_child("posts")
    if posts_node is not None:
        user.posts = [_read_post(post) for post in posts_node.find_children("post")]

    followers_node = node.find_child("followers")
    if followers_node is not None:
        for follower in followers_node.find_children("follower"):
            follower_id = follower.child_text("id")
            if follower_id and follower_id not in user.follower_ids:
                user.follower_ids.append(follower_id)
    return user


def network_from_tree(root: Optional[XMLNode], correlation_id: Optional[str] = None) -> SocialNetwork:
    """Collect every ``user`` element under ``root`` into a network."""
    logger = get_logger(__name__, correlation_id, "social_network")
    network = SocialNetwork()
    if root is None:
        return network

    user_nodes = [root] if root.name == "user" else root.find_all("user")
    for node in user_nodes:
        user = _read_user(node)
        if not user.id:
            logger.warning("Skipping user without id", extra={"user_name": user.name})
            continue
        if user.id in network:
            logger.warning("Skipping duplicate user id", extra={"user_id": user.id})
            continue
        network.add_user(user)

    logger.debug("Network built", extra={"user_count": len(network)})
    return network


def build_network(text: str, correlation_id: Optional[str] = None) -> SocialNetwork:
    """Parse a users document into a SocialNetwork."""
    return network_from_tree(build_tree(text), correlation_id)
