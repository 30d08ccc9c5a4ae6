"""Application services layer (session state, navigation, wiring).

Services coordinate the transport, the session store and the domain wrappers.
They should avoid UI concerns; navigation goes through a Navigator.
"""
