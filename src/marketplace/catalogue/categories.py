"""Category management: commands, handler and read helpers."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.category import Category
from marketplace.domain import marketplace


@marketplace.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    parent_category_id: Identifier()


@marketplace.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    parent_category_id: Identifier()


@marketplace.command(part_of="Category")
class SetCategoryParent:
    category_id: Identifier(required=True)
    parent_category_id: Identifier(required=True)


@marketplace.command(part_of="Category")
class DetachCategory:
    """Promote a subcategory to a root category."""

    category_id: Identifier(required=True)


@marketplace.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@marketplace.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        parent = repo.get(command.parent_category_id) if command.parent_category_id else None

        category = Category.create(
            name=command.name,
            description=command.description,
            parent=parent,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.update_details(name=command.name, description=command.description)

        if command.parent_category_id and command.parent_category_id != category.parent_category_id:
            category.move_under(repo.get(command.parent_category_id))

        repo.add(category)

    @handle(SetCategoryParent)
    def set_category_parent(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.move_under(repo.get(command.parent_category_id))
        repo.add(category)

    @handle(DetachCategory)
    def detach_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.detach()
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)


def root_categories() -> list[Category]:
    return current_domain.repository_for(Category).find_roots()


def subcategories(category_id) -> list[Category]:
    repo = current_domain.repository_for(Category)
    parent = repo.get(category_id)
    return repo.find_children(parent.id)


def category_names() -> list[str]:
    return current_domain.repository_for(Category).all_names()


def get_category(category_id) -> Category:
    return current_domain.repository_for(Category).get(category_id)


def all_categories() -> list[Category]:
    return current_domain.repository_for(Category).find_all()
