from .priority_list import ItemNotFoundError, PriorityList

__all__ = ['ItemNotFoundError', 'PriorityList']
