from typing import List

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import DataTable, Input, Label, Select

from store.models import Item
from utils.pure import format_price
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal


class CatalogScreen(BaseScreen):
    """
    Browse, search and filter the catalog, then open an item to add it to the cart.
    """

    def __init__(self):
        super().__init__()
        self._results: List[Item] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Horizontal(id="hort-catalog-filters"):
            yield Input(
                id="input-search", placeholder="Start typing to search products..."
            )
            yield Select(
                [(c, c) for c in self.app.session.catalog.categories()],
                prompt="All categories",
                id="select-category",
            )
        table = DataTable(id="table-catalog", cursor_type="row", zebra_stripes=True)
        table.add_columns("ID", "Name", "Category", "Price")
        yield table
        with Horizontal(id="hort-quick-add"):
            yield Label("Add by ID or name:")
            yield Input(placeholder="0001 or canva", id="input-quick-add")
            yield Label("", id="label-result-cnt")

    def on_mount(self):
        self.update_results()
        self.query_one("#input-search").focus()

    @on(Input.Changed, "#input-search")
    @on(Select.Changed, "#select-category")
    def handle_filter_change(self) -> None:
        self.update_results()

    def update_results(self) -> None:
        catalog = self.app.session.catalog
        query_str = self.query_one("#input-search", Input).value.strip()
        category = self.query_one("#select-category", Select).value

        results = catalog.search(query_str)
        if category is not Select.BLANK:
            results = [item for item in results if item.category == category]
        self._results = results

        currency = self.app.config.currency
        table = self.query_one(DataTable)
        table.clear()
        for item in results:
            table.add_row(
                item.id,
                item.name,
                item.category,
                format_price(item.unit_price, currency),
                key=item.id,
            )
        if results:
            cnt_text = f"{len(results)} product(s)"
        elif query_str:
            cnt_text = f"No products found containing: {query_str}"
        else:
            cnt_text = "No products to display."
        self.query_one("#label-result-cnt", Label).update(cnt_text)

    @on(DataTable.RowSelected)
    def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        item = self.app.session.catalog.find_by_id(event.row_key.value)
        if item:
            self.open_item(item)

    @on(Input.Submitted, "#input-quick-add")
    def handle_quick_add(self, event: Input.Submitted) -> None:
        if not event.value.strip():
            return
        # same resolution as the results list: id first, then partial name
        item = self.app.session.catalog.lookup(event.value, within=self._results)
        if item is None:
            self.notify("Product not found in the current list.", severity="warning")
            return
        event.input.value = ""
        self.open_item(item)

    @work()
    async def open_item(self, item: Item) -> None:
        if await self.app.push_screen_wait(ProdDetailModal(item)):
            await self.refresh_sidebar()
