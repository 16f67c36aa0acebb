"""
# PNG chunks for humans.

A PNG file is a signature followed by a sequence of chunks, each one made of a length,
a four letters type, the data and a CRC. Here each component of the format is
described declaratively as a Chunk made of Fields, in order of appearance.

Two basic main operations are defined for the file format and its sub components:

 1. unpack(): the more straightforward, i.e., reading the binary data
    and build a high-level representation of that.
    Usually when unpacking you use as offset the actual offset of the
    stream and the chunk itself knows how many bytes needs to read
    to finalize the representation

 2. pack(): encode the high-level representation into binary data.

to these we add one more

 3. relayout(): trigger a recursive layout "negotiation" between a component
    and its subcomponents so to have offset and size set in the correct way.
    A packing also implies a relayouting.

An instance representing a file format can be in one of the following states

 1. INIT
 2. RELAYOUTING
 3. UNPACKING
 4. DONE

Any error found while unpacking is raised as an exception carrying the chain of
fields that lead to it (see pngstruct.exceptions).
"""
