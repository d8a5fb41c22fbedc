from enum import IntEnum


class ModelID(IntEnum):
    '''model-kind tag used to select a point evaluator'''
    GAUSS_1D = 0
    GAUSS_2D = 1
    GAUSS_2D_ELLIPTIC = 2
    GAUSS_2D_ROTATED = 3


NV_G1D = 4		# !< number of parameters for GAUSS_1D (A,x0,s,B)
NV_G2D = 5		# !< number of parameters for GAUSS_2D (A,x0,y0,s,B)
NV_G2DE = 6		# !< number of parameters for GAUSS_2D_ELLIPTIC (A,x0,y0,sx,sy,B)
NV_G2DR = 7		# !< number of parameters for GAUSS_2D_ROTATED (A,x0,y0,sx,sy,B,theta)

# parameter order of GAUSS_2D_ROTATED
P_A = 0
P_X0 = 1
P_Y0 = 2
P_SX = 3
P_SY = 4
P_B = 5
P_THETA = 6

REAL_SIZE = 4   # !< bytes per single precision value, user_info sizes are in bytes
