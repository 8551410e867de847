"""Camera and projection maths, key-frame animation, glTF animation data, and cloth and ocean simulations for a 3D renderer."""

__version__ = "0.1.0"