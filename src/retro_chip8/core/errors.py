# retro_chip8/core/errors.py
"""
Core Layer (致命的エラー)

仮想マシンの実行を継続できない状態を表す例外階層を定義します。
これらの例外が送出された後、ホストは実行を停止し、必要であればリセットします。
"""
from typing import Optional


# @intent:responsibility 仮想マシンの全ての致命的エラーの基底クラスです。
class EmulationError(Exception):
    """
    エミュレーション中に発生した回復不能なエラー。
    """
    pass


# @intent:responsibility どの命令パターンにも一致しないオペコードを表します。
# @intent:post-condition 送出時点でPCは不正な命令の先頭を指したままです。
class UnknownOpcodeError(EmulationError):
    """
    未実装（未定義）の命令ワードを検出したことを表す例外。
    生の16bit命令ワードと、その命令が置かれていたアドレスを保持します。
    """
    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        self.address = address
        where = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"Unimplemented instruction {opcode:#06x}{where}")


# @intent:responsibility バッキング配列の範囲外へのアクセスを表します。
# @intent:rationale IndexErrorも継承し、RAMデバイスの範囲外アクセスと同じ扱いで捕捉できるようにします。
class AddressOutOfRangeError(EmulationError, IndexError):
    """
    メモリ、コールスタック、キーパッドなどの固定長領域の範囲外アクセス。
    """
    def __init__(self, message: str, address: Optional[int] = None):
        self.address = address
        super().__init__(message)
