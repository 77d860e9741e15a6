"""Capability names checked through the authorization policy."""

EDIT_POSTS = "edit_posts"
FLAG_CURATE = "flag_curate"
UNRESTRICTED = "unrestricted"
MODERATOR = "moderator"

ALL_CAPABILITIES = frozenset({EDIT_POSTS, FLAG_CURATE, UNRESTRICTED, MODERATOR})
