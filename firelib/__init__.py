# Created on Mon Apr 08 10:12:31 2019

# Author: XiaoTao Wang
# Organization: HuaZhong Agricultural University

__author__ = 'XiaoTao Wang'
__version__ = '0.1.0'
__license__ = 'GPLv3+'
