# cli.py - interactive catalog browser with autocomplete
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog import config
from sdk.pycatalog import CatalogClient

console = Console()
c = CatalogClient(base_url=config.API_URL)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
category_cache: List[str] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=5)
    table.add_column("Name", style="bold", width=36)
    table.add_column("Category", width=18)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Stock", justify="right", width=7)
    table.add_column("Rating", justify="right", width=7)

    for p in products:
        stock = p.get("stock", 0)
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("category", "N/A"),
            f"{p.get('price', 0):,.2f} руб.",
            str(stock) if stock else "[red]0[/red]",
            f"{p.get('rating', 0):.1f}",
        )
    console.print(table)


def show_product(product: Dict[str, Any]):
    """Detail card for a single product."""
    body = (
        f"[dim]{product.get('category', '')}[/dim]\n\n"
        f"{product.get('description', '')}\n\n"
        f"💰 Цена: [bold green]{product.get('price', 0):,.2f} руб.[/bold green]\n"
        f"📦 На складе: {product.get('stock', 0)}\n"
        f"⭐ Рейтинг: {product.get('rating', 0)}\n"
        f"🖼  {product.get('image', '')}"
    )
    console.print(Panel(body, title=f"#{product.get('id')} {product.get('name', '')}", border_style="cyan"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper: failures are reported, never raised
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the result, or None after reporting the error in the status panel.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def get_category_completer():
    global category_cache
    if not category_cache:
        category_cache = try_api(c.list_categories) or []
    return WordCompleter(category_cache, ignore_case=True, sentence=True)


def refresh_products():
    global product_cache
    product_cache = try_api(c.list_products) or []


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyCatalog",
        "[bold blue]Product catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 0.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print(show_status(f"'{raw}' is not a product ID", False))
        return None


def collect_changes(current: Dict[str, Any]) -> Dict[str, Any]:
    """Ask for every field, keeping only the ones whose answer differs from the current value."""
    answers: Dict[str, Any] = {
        "name": prompt_with_autocomplete("Name", default=current["name"]),
        "category": prompt_with_autocomplete("🏷️ Category", completer=get_category_completer(),
                                             default=current["category"]),
        "description": prompt_with_autocomplete("Description", default=current["description"]),
        "price": ask_float("💰 Price", default=current["price"]),
        "stock": IntPrompt.ask("📦 Stock", default=current["stock"]),
        "rating": ask_float("⭐ Rating (0-5)", default=current["rating"]),
        "image": prompt_with_autocomplete("Image URL", default=current["image"]),
    }
    return {k: v for k, v in answers.items() if v != current.get(k)}


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
    refresh_products()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "4", "➕ Create product"),
            ("2", "🏷️ List by category", "5", "✏️ Edit product"),
            ("3", "ℹ️ View product", "6", "🗑️ Delete product"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                show_products(products)

        elif choice == "2":
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer()).strip()
            products = try_api(c.list_products, category, success_msg=f"Products in '{category}' loaded")
            if products is not None:
                show_products(products)

        elif choice == "3":
            pid = ask_product_id()
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
                if resp:
                    show_product(resp)

        elif choice == "4":
            name = prompt_with_autocomplete("Enter product name")
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
            description = prompt_with_autocomplete("Description")
            price = ask_float("💰 Price", default=1000.0)
            stock = IntPrompt.ask("📦 Stock", default=1)
            rating = ask_float("⭐ Rating (0-5)", default=0.0)
            image = prompt_with_autocomplete("Image URL")
            resp = try_api(
                c.create_product, name, category, description, price, stock, rating, image,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                show_product(resp)
                refresh_products()

        elif choice == "5":
            pid = ask_product_id()
            current = try_api(c.get_product, pid) if pid is not None else None
            if current:
                changes = collect_changes(current)
                if not changes:
                    console.print("[italic yellow]Nothing changed[/italic yellow]")
                else:
                    resp = try_api(c.update_product, pid, **changes,
                                   success_msg=f"Product {pid} updated ({', '.join(changes)})")
                    if resp:
                        show_product(resp)
                        refresh_products()

        elif choice == "6":
            pid = ask_product_id()
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_products()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using PyCatalog! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
