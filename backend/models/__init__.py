# Import every model so Base.metadata knows all tables
from models.category import Category
from models.location import Location
from models.author import Author
from models.position_schema import PositionSchema
from models.item import Item
from models.position import Position
from models.content import Content
from models.stock_history import StockHistory
from models.item_whitelist import ItemWhitelist
from models.upload_file import UploadFile
from models.account_deletion import AccountDeletion
from models.log import Log
