"""
certno — marriage-registration certificate number codec.

Encodes register locations (book, volume, serial, page and their
optional letter/years) into the compact certificate number
`WBMSDBRW<book><volume>[letter][year]<serial>[year]<page>`, and decodes
numbers of every historical generation back into fields without ever
raising.

Built on the Railway-Oriented Programming (ROP) framework for the
service layers around the codec.
"""

__version__ = "0.1.0"
