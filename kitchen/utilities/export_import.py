"""
Export functionality for generated shopping lists (JSON, CSV and plain text).
"""
import csv
import io
import json
import re
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from kitchen.domain.ShoppingList import ShoppingList

logger = logging.getLogger(__name__)

CSV_FIELDS = ['category', 'ingredient', 'amount', 'unit', 'recipes', 'inInventory', 'purchased', 'optional']


class ShoppingListExporter:
    """Export a shopping list in various formats."""

    def __init__(self, shopping_list, title: str = "Shopping List"):
        if isinstance(shopping_list, dict):
            shopping_list = ShoppingList.from_dict(shopping_list)
        self.shopping_list: ShoppingList = shopping_list
        self.title = title

    def to_json(self) -> str:
        return json.dumps(self.shopping_list.to_dict(), indent=2, ensure_ascii=False)

    def to_csv(self) -> str:
        """One row per item, category first, for spreadsheet use."""
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for category, items in self.shopping_list.items.items():
            for item in items:
                writer.writerow({
                    'category': category,
                    'ingredient': item.ingredient,
                    'amount': item.amount,
                    'unit': item.unit,
                    'recipes': ', '.join(item.recipes),
                    'inInventory': item.in_inventory,
                    'purchased': item.purchased,
                    'optional': item.optional,
                })
        return out.getvalue()

    def to_text(self) -> str:
        """Checkbox list grouped by category, with inventory/purchase status and recipes."""
        blocks = []
        for category, items in self.shopping_list.items.items():
            lines = []
            for item in items:
                checkbox = '☑' if item.purchased else '☐'
                if item.purchased:
                    status = ' [PURCHASED]'
                elif item.in_inventory:
                    status = ' [IN INVENTORY]'
                else:
                    status = ''
                recipes = f" ({', '.join(item.recipes)})" if item.recipes else ''
                amount = f"{item.amount} " if item.amount else ''
                lines.append(f"  {checkbox} {amount}{item.ingredient}{status}{recipes}")
            if lines:
                blocks.append(f"{category}:\n" + "\n".join(lines))
        return f"Shopping List - {self.title}\n\n" + "\n\n".join(blocks)

    def _default_path(self, extension: str) -> Path:
        slug = re.sub(r'[^a-z0-9]+', '-', self.title.lower()).strip('-') or 'list'
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return Path(f"shopping-list-{slug}_{timestamp}.{extension}")

    def _write(self, content: str, output_path: Optional[Path], extension: str) -> Optional[Path]:
        output_path = Path(output_path) if output_path is not None else self._default_path(extension)
        try:
            with open(output_path, 'w', newline='' if extension == 'csv' else None, encoding='utf-8') as f:
                f.write(content)
            logger.info(f"Exported shopping list ({len(self.shopping_list.all_items())} items) to {output_path}")
            return output_path
        except OSError as e:
            logger.error(f"Export failed: {e}")
            return None

    def export_json(self, output_path: Path = None) -> Optional[Path]:
        return self._write(self.to_json(), output_path, 'json')

    def export_csv(self, output_path: Path = None) -> Optional[Path]:
        return self._write(self.to_csv(), output_path, 'csv')

    def export_text(self, output_path: Path = None) -> Optional[Path]:
        return self._write(self.to_text(), output_path, 'txt')
