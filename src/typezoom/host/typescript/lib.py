"""Built-in standard library declarations."""

from __future__ import annotations

LIB_FILE_NAME = "lib.es5.d.ts"

LIB_SOURCE = """\
interface Array<T> {
    length: number;
    [n: number]: T;
    push(...items: T[]): number;
    pop(): T | undefined;
}

interface ReadonlyArray<T> {
    readonly length: number;
    readonly [n: number]: T;
}

interface Promise<T> {
    then(onfulfilled?: (value: T) => any): Promise<any>;
}

interface Map<K, V> {
    readonly size: number;
    has(key: K): boolean;
    forEach(callbackfn: (value: V, key: K) => void): void;
}

interface Set<T> {
    readonly size: number;
    has(value: T): boolean;
    add(value: T): this;
}

interface Date {
    getTime(): number;
    toISOString(): string;
}
"""
