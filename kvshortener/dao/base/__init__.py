from kvshortener.dao.base.key_value_base_dao import KeyValueBaseDAO, Namespace


__all__ = [
    'KeyValueBaseDAO',
    'Namespace',
]
