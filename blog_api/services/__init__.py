# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic for a single domain aggregate:
#
#   user_service           registration, CRUD, deactivate / reactivate
#   auth_service           credential check (login)
#   tag_service            CRUD for Tag
#   article_service        CRUD + pagination + search for Article
#   article_tag_service    tag sync, attach / detach, articles of a tag
#   comment_service        comments, replies, threads of an article
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency, and all of them return a ``Result``.
