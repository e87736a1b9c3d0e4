"""Application service: the product editing session.

ProductSession is the only component allowed to change the catalog. It
owns the in-memory product list and the single open Draft, and writes
the whole list through the ProductStore after every mutating command,
so the catalog and the stored blob agree whenever a command returns.

Commands run one at a time to completion (validate, mutate, persist,
publish); there is no locking because there is only one writer.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from catalog.application.dto import ProductDTO, SessionSnapshot
from catalog.domain.exceptions import (
    NotFoundError,
    PersistenceWriteFailure,
    SessionStateError,
)
from catalog.domain.model.draft import Draft
from catalog.domain.model.product import Product
from catalog.domain.model.session_state import EditMode, SessionState
from catalog.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)


def epoch_millis_id() -> str:
    """Default id: the current time in milliseconds, as text."""
    return str(time.time_ns() // 1_000_000)


class ProductSession:

    def __init__(
        self,
        store: ProductStore,
        id_factory: Callable[[], str] = epoch_millis_id,
    ) -> None:
        self._store = store
        self._id_factory = id_factory
        self._products: list[Product] = store.load()
        self._state = SessionState.idle()
        self._draft: Draft | None = None
        self._synced = True
        logger.debug("Session started with %d product(s)", len(self._products))

    # --- Read side ------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def draft(self) -> Draft | None:
        return self._draft

    @property
    def products(self) -> tuple[ProductDTO, ...]:
        return tuple(ProductDTO.from_product(p) for p in self._products)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            products=self.products,
            state=self._state,
            draft=self._draft,
            synced=self._synced,
        )

    # --- Form commands --------------------------------------------------------

    def begin_create(self) -> SessionSnapshot:
        """Open an empty "add product" form, discarding any unsaved draft."""
        self._state = SessionState.creating()
        self._draft = Draft.empty()
        logger.debug("Opened add form")
        return self.snapshot()

    def begin_edit(self, product_id: str) -> SessionSnapshot:
        """Open the edit form for *product_id*, prefilled from its current values.

        Any other unsaved draft is discarded. If the product does not exist
        the session is left exactly as it was.
        """
        product = self._require(product_id)
        self._state = SessionState.editing(product.id)
        self._draft = Draft.from_product(product)
        logger.debug("Opened edit form for product %s", product.id)
        return self.snapshot()

    def update_draft_field(self, field_name: str, value: str) -> SessionSnapshot:
        if self._draft is None:
            raise SessionStateError("No product form is open")
        self._draft = self._draft.with_field(field_name, value)
        return self.snapshot()

    def cancel_edit(self) -> SessionSnapshot:
        if not self._state.is_idle:
            logger.debug("Discarded draft (%s)", self._state)
        self._close_form()
        return self.snapshot()

    def commit(self) -> SessionSnapshot:
        """Save the open form: create in Creating, update in Editing."""
        if self._state.mode is EditMode.CREATING:
            return self.create(self._draft)
        if self._state.mode is EditMode.EDITING:
            return self.update(self._state.product_id, self._draft)
        raise SessionStateError("No product form is open")

    # --- Mutating commands ----------------------------------------------------

    def create(self, draft: Draft) -> SessionSnapshot:
        """Add a product built from *draft* to the end of the catalog.

        Raises ValidationError (session untouched) if the draft does not
        parse.
        """
        fields = draft.parse().raise_for_errors()

        product = Product.create(self._mint_id(), fields)
        self._products.append(product)
        self._close_form()
        logger.info("Created product %s (%s)", product.id, product.name)

        self._persist()
        return self.snapshot()

    def update(self, product_id: str, draft: Draft) -> SessionSnapshot:
        """Replace every field of *product_id* with the values in *draft*.

        The id and the product's position in the catalog never change.
        A missing product closes the form and raises NotFoundError; an
        invalid draft raises ValidationError and keeps the form open.
        """
        product = self._find(product_id)
        if product is None:
            self._close_form()
            logger.warning("Update skipped: product %s no longer exists", product_id)
            raise NotFoundError(f"Product with ID '{product_id}' not found")

        fields = draft.parse().raise_for_errors()

        product.apply(fields)
        self._close_form()
        logger.info("Updated product %s (%s)", product.id, product.name)

        self._persist()
        return self.snapshot()

    def delete(self, product_id: str) -> SessionSnapshot:
        """Remove *product_id* if present. Deleting a missing id is a no-op."""
        before = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]

        if self._state.is_editing(product_id):
            self._close_form()

        if len(self._products) < before:
            logger.info("Deleted product %s", product_id)
        else:
            logger.debug("Delete of unknown product %s ignored", product_id)

        self._persist()
        return self.snapshot()

    # --- Internal helpers -----------------------------------------------------

    def _find(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def _require(self, product_id: str) -> Product:
        product = self._find(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def _close_form(self) -> None:
        self._state = SessionState.idle()
        self._draft = None

    def _mint_id(self) -> str:
        taken = {p.id for p in self._products}
        candidate = self._id_factory()

        if candidate.isdigit():
            # Same-millisecond creates: step forward to the next free timestamp.
            number = int(candidate)
            while str(number) in taken:
                number += 1
            return str(number)

        unique, suffix = candidate, 1
        while unique in taken:
            unique = f"{candidate}-{suffix}"
            suffix += 1
        return unique

    def _persist(self) -> None:
        """Write the whole catalog. Failures leave memory as the source of truth."""
        try:
            self._store.save(list(self._products))
        except PersistenceWriteFailure as exc:
            self._synced = False
            logger.error("Catalog write failed; will retry on next change: %s", exc)
            exc.snapshot = self.snapshot()
            raise
        if not self._synced:
            logger.info("Catalog write succeeded; storage is back in sync")
        self._synced = True
