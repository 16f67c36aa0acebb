import logging
from enum import Enum, auto
from typing import List


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT        = 0
    RELAYOUTING = auto()
    UNPACKING   = auto()
    DONE        = auto()


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_chunk(instance, condition):
    is_root = condition(instance)
    father = instance

    while not is_root:
        father = instance.father

        is_root = condition(father)
        instance = father

    return father


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length': reading the data during unpacking
    uses the value of 'length', setting the data writes back its size into 'length'.

    The syntax for defining the expression is inspired from module resolution:
    a leading '.' indicates we refer to a field at the same level, otherwise the
    path is resolved starting from the root chunk.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        self.logger.debug("trying to resolve '%s' for '%s'", self.expression, instance.__class__.__name__)

        # '.length'.split(".") -> ['', 'length']
        # 'header.length'.split(".") -> ['header', 'length']
        fields_path: List[str] = self.expression.split('.')

        if fields_path[0] != '':
            field = get_root_from_chunk(instance)
            self.logger.debug(" resolve from root: '%s'", field.__class__.__name__)
        else:  # we have a relative dependency
            field = instance.father
            self.logger.debug(" resolve from father: '%s'", field.__class__.__name__)
            fields_path = fields_path[1:]  # skip the first one that is empty

        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug(' resolved as field %s', field.__class__.__name__)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value

        self.logger.debug(' resolved with value %s', value)

        return value

    def resolve_and_set(self, instance, value):
        '''Write back the value into the field this dependency points to.'''
        real_field = self.resolve_field(instance)
        if not hasattr(real_field, 'value'):
            raise ValueError('something is wrong with the Dependency resolution!')
        real_field.value = value
