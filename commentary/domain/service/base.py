"""Common base for comment-engine services."""


class Service:
    """Marker base for domain services.

    Services own the comment rules that span several records: reply
    targets, thread assembly, moderation transitions and audit writes.
    They are request-scoped and stateless apart from their collaborators.
    """
