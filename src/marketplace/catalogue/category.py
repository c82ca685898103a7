"""Category aggregate root for product categorization."""

from datetime import datetime

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace

ROOT_LEVEL = 1


@marketplace.aggregate
class Category:
    """A node in the category tree.

    Root categories sit at level 1; every child is one level below its parent.
    """

    name: String(required=True, max_length=100)
    description: Text()
    parent_category_id: Identifier()
    level: Integer(default=ROOT_LEVEL, min_value=ROOT_LEVEL)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, description=None, parent=None):
        from marketplace.catalogue.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            description=description,
            parent_category_id=parent.id if parent else None,
            level=parent.level + 1 if parent else ROOT_LEVEL,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                parent_category_id=category.parent_category_id,
                level=category.level,
            )
        )
        return category

    def update_details(self, name=None, description=None):
        from marketplace.catalogue.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                description=self.description,
            )
        )

    def move_under(self, parent):
        from marketplace.catalogue.events import CategoryMoved

        self.parent_category_id = parent.id
        self.level = parent.level + 1
        self.updated_at = datetime.now()

        self.raise_(
            CategoryMoved(
                category_id=self.id,
                parent_category_id=parent.id,
                level=self.level,
            )
        )

    def detach(self):
        """Turn a subcategory into a root category. Roots are left untouched."""
        from marketplace.catalogue.events import CategoryMoved

        if self.parent_category_id is None:
            return

        self.parent_category_id = None
        self.level = ROOT_LEVEL
        self.updated_at = datetime.now()

        self.raise_(
            CategoryMoved(
                category_id=self.id,
                parent_category_id=None,
                level=ROOT_LEVEL,
            )
        )
