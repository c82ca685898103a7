"""Application tests for category management handlers and read helpers."""

import pytest
from marketplace.catalogue.categories import (
    CreateCategory,
    DeleteCategory,
    DetachCategory,
    SetCategoryParent,
    UpdateCategory,
    all_categories,
    category_names,
    get_category,
    root_categories,
    subcategories,
)
from marketplace.catalogue.category import Category
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain


def _create_category(**overrides):
    defaults = {"name": "Kitchen"}
    defaults.update(overrides)
    command = CreateCategory(**defaults)
    return current_domain.process(command, asynchronous=False)


def _get(category_id):
    return current_domain.repository_for(Category).get(category_id)


class TestCreateCategoryHandler:
    def test_create_root_category(self):
        category = _get(_create_category())
        assert category.name == "Kitchen"
        assert category.level == 1
        assert category.parent_category_id is None

    def test_create_child_category(self):
        parent_id = _create_category(name="Kitchen")
        child_id = _create_category(name="Mugs", parent_category_id=parent_id)

        child = _get(child_id)
        assert child.level == 2
        assert str(child.parent_category_id) == parent_id

    def test_unknown_parent(self):
        with pytest.raises(ObjectNotFoundError):
            _create_category(name="Mugs", parent_category_id="missing-parent")


class TestUpdateCategoryHandler:
    def test_update_name(self):
        category_id = _create_category()
        current_domain.process(UpdateCategory(category_id=category_id, name="Home & Kitchen"), asynchronous=False)
        assert _get(category_id).name == "Home & Kitchen"

    def test_update_with_new_parent_recomputes_level(self):
        kitchen = _create_category(name="Kitchen")
        mugs = _create_category(name="Mugs", parent_category_id=kitchen)
        outdoor = _create_category(name="Outdoor")

        current_domain.process(UpdateCategory(category_id=outdoor, parent_category_id=mugs), asynchronous=False)

        moved = _get(outdoor)
        assert str(moved.parent_category_id) == mugs
        assert moved.level == 3


class TestHierarchyHandlers:
    def test_set_parent(self):
        kitchen = _create_category(name="Kitchen")
        mugs = _create_category(name="Mugs")

        current_domain.process(SetCategoryParent(category_id=mugs, parent_category_id=kitchen), asynchronous=False)
        assert _get(mugs).level == 2

    def test_detach(self):
        kitchen = _create_category(name="Kitchen")
        mugs = _create_category(name="Mugs", parent_category_id=kitchen)

        current_domain.process(DetachCategory(category_id=mugs), asynchronous=False)

        detached = _get(mugs)
        assert detached.parent_category_id is None
        assert detached.level == 1

    def test_delete(self):
        category_id = _create_category()
        current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            _get(category_id)


class TestCategoryQueries:
    def test_root_categories(self):
        kitchen = _create_category(name="Kitchen")
        _create_category(name="Mugs", parent_category_id=kitchen)
        _create_category(name="Garden")

        assert sorted(c.name for c in root_categories()) == ["Garden", "Kitchen"]

    def test_subcategories(self):
        kitchen = _create_category(name="Kitchen")
        _create_category(name="Mugs", parent_category_id=kitchen)
        _create_category(name="Teapots", parent_category_id=kitchen)

        assert sorted(c.name for c in subcategories(kitchen)) == ["Mugs", "Teapots"]

    def test_subcategories_of_unknown_category(self):
        with pytest.raises(ObjectNotFoundError):
            subcategories("missing-category")

    def test_get_category(self):
        category_id = _create_category(name="Kitchen")
        assert get_category(category_id).name == "Kitchen"

    def test_all_categories(self):
        kitchen = _create_category(name="Kitchen")
        _create_category(name="Mugs", parent_category_id=kitchen)

        assert sorted(c.name for c in all_categories()) == ["Kitchen", "Mugs"]

    def test_category_names(self):
        _create_category(name="Kitchen")
        _create_category(name="Garden")

        assert sorted(category_names()) == ["Garden", "Kitchen"]
