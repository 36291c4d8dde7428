from foodswift.models.user import User
from foodswift.models.restaurant import Restaurant
from foodswift.models.menu_item import MenuItem
from foodswift.models.address import Address
from foodswift.models.order import Order
