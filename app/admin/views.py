"""Back-office console views (SQLAdmin).

Role changes and account creation go through the REST API, so the user view
is read-mostly: operators can inspect accounts and edit contact fields.
"""

from sqladmin import ModelView

from app.catalog.models import BaseProduct, PrintableArea
from app.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-users"

    can_create = False

    column_list = [
        User.email,
        User.display_name,
        User.role,
        User.status,
        User.admin_level,
        User.id,
        User.external_id,
        User.created_at,
        User.updated_at,
    ]

    column_searchable_list = [
        User.email,
        User.display_name,
        User.external_id,
        User.employee_id,
    ]

    column_sortable_list = [
        User.email,
        User.display_name,
        User.role,
        User.status,
        User.created_at,
        User.updated_at,
    ]

    form_excluded_columns = [
        User.role,
        User.external_id,
        User.created_at,
        User.updated_at,
        User.deleted_at,
    ]


class BaseProductAdmin(ModelView, model=BaseProduct):
    name = "Base Product"
    name_plural = "Base Products"
    icon = "fa-solid fa-shirt"

    column_list = [
        BaseProduct.title,
        BaseProduct.brand,
        BaseProduct.category,
        BaseProduct.base_cost,
        BaseProduct.currency,
        BaseProduct.id,
        BaseProduct.deleted_at,
        BaseProduct.created_at,
    ]

    column_searchable_list = [BaseProduct.title, BaseProduct.brand]

    column_sortable_list = [
        BaseProduct.title,
        BaseProduct.brand,
        BaseProduct.base_cost,
        BaseProduct.created_at,
    ]


class PrintableAreaAdmin(ModelView, model=PrintableArea):
    name = "Printable Area"
    name_plural = "Printable Areas"
    icon = "fa-solid fa-vector-square"

    column_list = [
        PrintableArea.name,
        PrintableArea.base_product_id,
        PrintableArea.x,
        PrintableArea.y,
        PrintableArea.width,
        PrintableArea.height,
        PrintableArea.dpi,
        PrintableArea.position,
    ]

    column_sortable_list = [PrintableArea.base_product_id, PrintableArea.position]


CONSOLE_VIEWS = (UserAdmin, BaseProductAdmin, PrintableAreaAdmin)
