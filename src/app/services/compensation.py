"""Parent/children creation with a compensating delete

Used wherever a header row and its line rows are created together
(template + lines, document + lines). If creating the children fails the
pending work is rolled back and the parent is explicitly deleted, so stores
that cannot undo the parent insert on rollback are left clean as well.

This is best effort: a crash between the parent insert and the
compensating delete can still leave an orphaned parent behind.
"""

import logging
from typing import Awaitable, Callable, Tuple, TypeVar
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

P = TypeVar("P")
C = TypeVar("C")


async def create_with_children(
    uow: UnitOfWork,
    create_parent: Callable[[], Awaitable[P]],
    create_children: Callable[[P], Awaitable[C]],
    delete_parent: Callable[[str], Awaitable[None]],
) -> Tuple[P, C]:
    """
    Create a parent, then its children; undo the parent if the children fail

    Nothing is committed here. On failure the original exception is
    re-raised after the compensating delete has been attempted and
    committed.

    Args:
        uow: Unit of work owning the transaction
        create_parent: Inserts the parent and returns it
        create_children: Inserts the children of the given parent
        delete_parent: Deletes the parent with the given id

    Returns:
        Tuple of (parent, children)
    """
    parent = await create_parent()
    # Captured before the rollback below expires the parent
    parent_id = parent.id

    try:
        children = await create_children(parent)
    except Exception:
        await uow.rollback()
        try:
            await delete_parent(parent_id)
            await uow.commit()
        except Exception as cleanup_error:
            await uow.rollback()
            logger.error(f"Compensating delete failed: {cleanup_error}")
        raise

    return parent, children
