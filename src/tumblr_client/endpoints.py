"""Declarative table of API endpoints.

Each :class:`Endpoint` names an HTTP method, a path template with
``:placeholders`` and the parameter rules checked before a request is built.
:class:`~tumblr_client.client.TumblrClient` turns every entry into a method.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from tumblr_client.errors.exceptions import InvalidParameterError

_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class Endpoint:
    """One API operation.

    Attributes:
        name: Client method name
        method: HTTP method
        path: Path template, ``:name`` segments are filled from positional args
        required: Groups of field names; a group of one is a required field, a
            larger group means exactly one of its fields must be given
        fixed: Params always sent with this endpoint (e.g. legacy post type)
        path_suffix: Param moved from the params into an optional trailing
            path segment (``/posts/photo``, ``/avatar/64``)
        accepts_data: Whether the endpoint may carry a ``data`` attachment
        doc: One-line description used as the method docstring
    """

    name: str
    method: str
    path: str
    required: tuple[tuple[str, ...], ...] = ()
    fixed: Mapping[str, Any] = field(default_factory=dict)
    path_suffix: str | None = None
    accepts_data: bool = True
    doc: str = ""

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(_PLACEHOLDER.findall(self.path))

    def validate(self, params: Mapping[str, Any]) -> None:
        """Check required fields.

        Raises:
            InvalidParameterError: If a required field is missing, or not
                exactly one of a group is given
        """
        for group in self.required:
            present = [name for name in group if params.get(name) not in (None, "")]
            if len(group) == 1:
                if not present:
                    raise InvalidParameterError(f'Missing required field: "{group[0]}"')
            elif not present:
                raise InvalidParameterError(f"Missing one of: {','.join(group)}")
            elif len(present) > 1:
                raise InvalidParameterError(f"Can only use one of: {','.join(group)}")

    def resolve_path(self, args: tuple[Any, ...], params: dict[str, Any]) -> str:
        """Fill the template from positional args and pop the suffix param.

        Mutates ``params`` by removing the suffix param.

        Raises:
            InvalidParameterError: On a wrong number of path arguments or an
                empty one
        """
        names = self.path_params
        if len(args) != len(names):
            raise InvalidParameterError(
                f"{self.name}() takes {len(names)} path argument(s) ({', '.join(names) or 'none'}), got {len(args)}"
            )

        values = {}
        for name, value in zip(names, args, strict=True):
            if value is None or str(value) == "":
                raise InvalidParameterError(f'Missing required path parameter: "{name}"')
            values[name] = quote(str(value), safe="")

        path = _PLACEHOLDER.sub(lambda match: values[match.group(1)], self.path)

        if self.path_suffix is not None:
            suffix = params.pop(self.path_suffix, None)
            if suffix not in (None, ""):
                path = f"{path}/{quote(str(suffix), safe='')}"

        return path

    def prepare(self, args: tuple[Any, ...], params: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
        """Validate and resolve a call into ``(path, params)``."""
        merged = {**params, **self.fixed}
        if not self.accepts_data:
            merged.pop("data", None)
        self.validate(merged)
        path = self.resolve_path(args, merged)
        return path, merged


def _blog(path: str) -> str:
    return f"/v2/blog/:blog_identifier{path}"


def _legacy_post(name: str, post_type: str, required: tuple[str, ...], accepts_data: bool) -> Endpoint:
    return Endpoint(
        name=name,
        method="POST",
        path=_blog("/post"),
        required=(required,),
        fixed={"type": post_type},
        accepts_data=accepts_data,
        doc=f"Create a legacy {post_type} post on a blog.",
    )


ENDPOINTS: tuple[Endpoint, ...] = (
    # Blogs
    Endpoint("blog_info", "GET", _blog("/info"), doc="Get information about a blog."),
    Endpoint("blog_avatar", "GET", _blog("/avatar"), path_suffix="size", doc="Get the avatar of a blog."),
    Endpoint("blog_likes", "GET", _blog("/likes"), doc="Get the posts a blog has liked."),
    Endpoint("blog_followers", "GET", _blog("/followers"), doc="Get the followers of a blog."),
    Endpoint("blog_posts", "GET", _blog("/posts"), path_suffix="type", doc="Get the posts of a blog."),
    Endpoint("blog_queue", "GET", _blog("/posts/queue"), doc="Get the queued posts of a blog."),
    Endpoint("blog_drafts", "GET", _blog("/posts/draft"), doc="Get the drafts of a blog."),
    Endpoint("blog_submissions", "GET", _blog("/posts/submission"), doc="Get the submissions to a blog."),
    # Posts
    Endpoint("create_post", "POST", _blog("/posts"), required=(("content",),), doc="Create an NPF post."),
    Endpoint("edit_post", "PUT", _blog("/posts/:post_id"), doc="Edit an NPF post."),
    Endpoint("create_legacy_post", "POST", _blog("/post"), doc="Create a post with legacy parameters."),
    Endpoint("edit_legacy_post", "POST", _blog("/post/edit"), required=(("id",),), doc="Edit a legacy post."),
    Endpoint("reblog_post", "POST", _blog("/post/reblog"), required=(("id",), ("reblog_key",)), doc="Reblog a post."),
    Endpoint("delete_post", "POST", _blog("/post/delete"), required=(("id",),), doc="Delete a post."),
    _legacy_post("create_text_post", "text", ("body",), accepts_data=False),
    _legacy_post("create_photo_post", "photo", ("data", "source"), accepts_data=True),
    _legacy_post("create_quote_post", "quote", ("quote",), accepts_data=False),
    _legacy_post("create_link_post", "link", ("url",), accepts_data=False),
    _legacy_post("create_chat_post", "chat", ("conversation",), accepts_data=False),
    _legacy_post("create_audio_post", "audio", ("data", "external_url"), accepts_data=True),
    _legacy_post("create_video_post", "video", ("data", "embed"), accepts_data=True),
    # Tagged
    Endpoint("tagged_posts", "GET", "/v2/tagged", required=(("tag",),), doc="Get posts with a tag."),
    # User
    Endpoint("user_info", "GET", "/v2/user/info", doc="Get the authenticating user and their blogs."),
    Endpoint("user_dashboard", "GET", "/v2/user/dashboard", doc="Get the dashboard of the authenticating user."),
    Endpoint("user_following", "GET", "/v2/user/following", doc="Get the blogs the authenticating user follows."),
    Endpoint("user_likes", "GET", "/v2/user/likes", doc="Get the posts the authenticating user liked."),
    Endpoint("follow_blog", "POST", "/v2/user/follow", required=(("url", "email"),), doc="Follow a blog."),
    Endpoint("unfollow_blog", "POST", "/v2/user/unfollow", required=(("url",),), doc="Unfollow a blog."),
    Endpoint("like_post", "POST", "/v2/user/like", required=(("id",), ("reblog_key",)), doc="Like a post."),
    Endpoint("unlike_post", "POST", "/v2/user/unlike", required=(("id",), ("reblog_key",)), doc="Unlike a post."),
)

ENDPOINTS_BY_NAME: dict[str, Endpoint] = {endpoint.name: endpoint for endpoint in ENDPOINTS}
