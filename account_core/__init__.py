"""账号核心：注册、登录、密码修改与删除用户。"""
__version__ = "0.1.0"
