"""
Shared test configuration and fixtures.

The JavaScript sources below are exactly what ``Function.prototype.toString``
prints for the corresponding callables.
"""

import pytest

from fnsig import CallableSource, SourceRegistry

JS_SOURCES = {
    "f0": """function f0(self, meme, init) {
    return [self, meme, init];
}""",
    "f1": r"""function f1(str = 'hello', arr = ['what\'s up'], reference=myVar[2].value) {
    return [str, arr, reference];
}""",
    "f2": "(meme, param) => [meme, param]",
    "f3": """async function f3(ids, {
    fetch = false,
    filter = user => user,
    arr = []
} = {}) {
    return [ids, fetch, filter.toString(), arr];
}""",
    "f4": """async function f4({
    item1,
    item2 = {
        prop1: true,
        prop2: false,
        prop3: ['array', 'of', 'strings']
    }
} = {}, [item3, item4, [item5, item6]]) {
    return [item1, item2, item3, item4, item5, item6];
}""",
    "f5": r"""class f5 {
    constructor({
        item1,
        item2 = {
            prop1: true,
            prop2: false,
            prop3: ['array', `of${null}...[]{'"'''"}`, 'strings, []...arg{( a, b )function static async => [native code]}']
        }
    } = {}, [item3, item4, [item5, item6]] = [1, 2, [3, 4]]) {
        this.propFn = nothing => [item1, item2, item3, item4, item5, item6, nothing];
    }
    instanceFn(a, b) {
        return a + b;
    }
    static staticFn(a, b) {
        return a + b;
    }
}""",
    "f6": """function anonymous({
        item1,
        item2 = { /* Get a load of this complicated [...arg] */
            prop1: true,
            prop2: false,
            prop3: ['array', 'of', 'strings']
        }
    } = {},[item3, item4, [item5, item6]]
) {
return [item1, item2, item3, item4, item5, item6];
}""",
    "f7": """function f7(
    name,  // Comment. ,name, other {...args}, maybe
    ...otherArgs /* Block comment!!!!. {}[][args][] */
) {
    return [name, ...otherArgs];
}""",
    "f8": "(/* Nothing! */) => 'nothing'",
    "propFn": "nothing => [item1, item2, item3, item4, item5, item6, nothing]",
    "instanceFn": """instanceFn(a, b) {
        return a + b;
    }""",
    "staticFn": """staticFn(a, b) {
        return a + b;
    }""",
    "f9": "class f9 extends f5 { }",
    "superClassNoConstructor": "class superClassNoConstructor {}",
    "f10": "class f10 extends superClassNoConstructor {}",
    "anonymous": "function() {}",
}


@pytest.fixture
def js_sources():
    """Serialized callables keyed by their runtime name."""
    return JS_SOURCES


@pytest.fixture
def registry():
    """Registry holding every fixture source, for supertype lookup."""
    return SourceRegistry(
        CallableSource(source_text=text, name=name)
        for name, text in JS_SOURCES.items()
    )


@pytest.fixture
def inheritance_registry():
    """A two-level chain: Leafy -> Middle -> Base (with constructor)."""
    return SourceRegistry([
        CallableSource(
            name="Base",
            source_text="class Base {\n    constructor(a, {b = 1} = {}) {\n        this.a = a;\n    }\n}",
        ),
        CallableSource(name="Middle", source_text="class Middle extends Base {\n    greet() {}\n}"),
        CallableSource(name="Leafy", source_text="class Leafy extends Middle {}"),
    ])
