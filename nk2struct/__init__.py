"""
# nk2struct: the Outlook nickname cache for humans.

The autocomplete stream is described declaratively: a file format is a Chunk,
i.e. an ordered sequence of fields declared as class attributes, and each field
knows how many bytes it needs to read to build its own representation.

Only one operation is defined

 1. unpack(): read the binary data from the actual offset of the stream and
    build a high-level representation of it.

Fields can depend on the value of other fields (a length, a count, a type code)
via Dependency(), so that variable layouts like tagged unions are expressible.

An instance can be in one of the following states

 1. INIT
 2. UNPACKING
 3. DONE
 4. ERROR

Errors are never recovered: a malformed stream raises an NK2Exception whose
chain tells which field was being unpacked.
"""
