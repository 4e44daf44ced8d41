"""Derived slug, level and full slug of categories."""

import asyncio
from dataclasses import replace

import pytest

from catalog_crawler.db.models import CategoryData


def run(coro):
    return asyncio.run(coro)


def test_root_category(catalog_service):
    root = run(catalog_service.save_category(CategoryData(name="Ноутбуки")))
    assert root.id is not None
    assert root.slug == "noutbuki"
    assert root.level == 1
    assert root.full_slug == "noutbuki"
    assert root.is_root()


def test_child_category(catalog_service):
    async def scenario():
        root = await catalog_service.save_category(CategoryData(name="Ноутбуки"))
        child = await catalog_service.save_category(CategoryData(name="Игровые", parent_id=root.id))
        return root, child

    root, child = run(scenario())
    assert child.level == 2
    assert child.full_slug == "noutbuki/igrovye"
    assert child.get_path_slugs() == ["noutbuki", "igrovye"]
    assert child.is_child_of(root.full_slug)


def test_explicit_slug_is_kept(catalog_service):
    category = run(catalog_service.save_category(CategoryData(name="Ноутбуки", slug="laptops")))
    assert category.full_slug == "laptops"


def test_reparenting_recomputes_derived_fields(catalog_service):
    async def scenario():
        root = await catalog_service.save_category(CategoryData(name="Ноутбуки"))
        orphan = await catalog_service.save_category(CategoryData(name="Игровые"))
        assert orphan.level == 1
        return await catalog_service.save_category(replace(orphan, parent_id=root.id))

    moved = run(scenario())
    assert moved.level == 2
    assert moved.full_slug == "noutbuki/igrovye"


def test_moving_back_to_root(catalog_service):
    async def scenario():
        root = await catalog_service.save_category(CategoryData(name="Ноутбуки"))
        child = await catalog_service.save_category(CategoryData(name="Игровые", parent_id=root.id))
        return await catalog_service.save_category(replace(child, parent_id=None))

    moved = run(scenario())
    assert moved.parent_id is None
    assert moved.level == 1
    assert moved.full_slug == "igrovye"


def test_ancestor_change_is_not_propagated(catalog_service):
    async def scenario():
        root = await catalog_service.save_category(CategoryData(name="Ноутбуки"))
        child = await catalog_service.save_category(CategoryData(name="Игровые", parent_id=root.id))
        await catalog_service.save_category(replace(root, slug="laptops"))
        return await catalog_service.category_repo.get_by_id(child.id)

    child = run(scenario())
    assert child.full_slug == "noutbuki/igrovye"


def test_third_level(catalog_service):
    async def scenario():
        root = await catalog_service.save_category(CategoryData(name="Электроника"))
        mid = await catalog_service.save_category(CategoryData(name="Ноутбуки", parent_id=root.id))
        return await catalog_service.save_category(CategoryData(name="Игровые", parent_id=mid.id))

    leaf = run(scenario())
    assert leaf.level == 3
    assert leaf.full_slug == "elektronika/noutbuki/igrovye"


def test_unknown_parent(catalog_service):
    with pytest.raises(ValueError):
        run(catalog_service.save_category(CategoryData(name="Игровые", parent_id=999)))


def test_self_parent(catalog_service):
    async def scenario():
        category = await catalog_service.save_category(CategoryData(name="Игровые"))
        await catalog_service.save_category(replace(category, parent_id=category.id))

    with pytest.raises(ValueError):
        run(scenario())


def test_same_name_is_not_duplicated(catalog_service, fake_supabase):
    async def scenario():
        first = await catalog_service.save_category(CategoryData(name="Ноутбуки"))
        second = await catalog_service.save_category(CategoryData(name="Ноутбуки"))
        return first, second

    first, second = run(scenario())
    assert first.id == second.id
    assert len(fake_supabase.rows("categories")) == 1


def test_moving_under_own_descendant(catalog_service):
    async def scenario():
        root = await catalog_service.save_category(CategoryData(name="Ноутбуки"))
        child = await catalog_service.save_category(CategoryData(name="Игровые", parent_id=root.id))
        grandchild = await catalog_service.save_category(CategoryData(name="Топовые", parent_id=child.id))
        await catalog_service.save_category(replace(root, parent_id=grandchild.id))

    with pytest.raises(ValueError):
        run(scenario())
