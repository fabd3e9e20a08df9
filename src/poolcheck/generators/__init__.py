"""Generators: declarative descriptions of test input.

Python 3.13+. Zero external dependencies.
"""

from .base import FilterMapped, Filtered, FlatMapped, Generator, Mapped
from .collections import (
    ChoiceGenerator,
    CollectionGenerator,
    InfoPoolGenerator,
    VecGenerator,
    choice,
    collections,
    info_pools,
    vecs,
)
from .composition import FnGenerator, generator_fn
from .core import (
    BoolGenerator,
    Const,
    LazyGenerator,
    OneOfGenerator,
    OptionalGenerator,
    ResultGenerator,
    WeightedCoinGenerator,
    booleans,
    consts,
    find_minimal,
    lazy,
    one_of,
    optional,
    optional_by,
    result,
    weighted_coin,
)
from .numbers import (
    FloatGenerator,
    IntGenerator,
    SignedIntGenerator,
    UniformFloatGenerator,
    UptoGenerator,
    f32s,
    f64s,
    i8s,
    i16s,
    i32s,
    i64s,
    isizes,
    scale_int,
    u8s,
    u16s,
    u32s,
    u64s,
    uniform_f32s,
    uniform_f64s,
    uptos,
    usizes,
)
from .tuples import TupleGenerator, tuples

__all__ = [
    "BoolGenerator",
    "ChoiceGenerator",
    "CollectionGenerator",
    "Const",
    "FilterMapped",
    "Filtered",
    "FlatMapped",
    "FloatGenerator",
    "FnGenerator",
    "Generator",
    "InfoPoolGenerator",
    "IntGenerator",
    "LazyGenerator",
    "Mapped",
    "OneOfGenerator",
    "OptionalGenerator",
    "ResultGenerator",
    "SignedIntGenerator",
    "TupleGenerator",
    "UniformFloatGenerator",
    "UptoGenerator",
    "VecGenerator",
    "WeightedCoinGenerator",
    "booleans",
    "choice",
    "collections",
    "consts",
    "f32s",
    "f64s",
    "find_minimal",
    "generator_fn",
    "i8s",
    "i16s",
    "i32s",
    "i64s",
    "info_pools",
    "isizes",
    "lazy",
    "one_of",
    "optional",
    "optional_by",
    "result",
    "scale_int",
    "u8s",
    "u16s",
    "u32s",
    "u64s",
    "uniform_f32s",
    "uniform_f64s",
    "uptos",
    "usizes",
    "vecs",
    "weighted_coin",
]
