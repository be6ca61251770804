"""Posts today's Food&Co canteen menu to a chat webhook, one card per location"""

__version__ = '0.2'
