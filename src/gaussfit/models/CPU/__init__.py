from .CPUfunctions import *
