# retro_chip8/transport/bus.py
"""
Transport Layer (共通バス)

このモジュールは、システム全体のメモリアドレス空間を抽象化し、
読み書きアクセスを適切なデバイスに委譲する責務を負います。
範囲外のアクセスは全て AddressOutOfRangeError として検出されます。
"""
from abc import ABC, abstractmethod
from typing import List, Tuple

from retro_chip8.core.errors import AddressOutOfRangeError

# @intent:responsibility バスの抽象デバイスインターフェースを定義します。
class Device(ABC):
    """
    バスに接続されるデバイスの抽象基底クラス。
    全てのデバイスはreadとwriteのインターフェースを実装する必要があります。
    """
    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出す責務を負います。
    # @intent:pre-condition アドレスはデバイスの有効範囲内である必要があります。
    @abstractmethod
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アドレスはデバイス内でのオフセットとして扱われます。
        """
        pass

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition アドレスはデバイスの有効範囲内であり、データは8bit値である必要があります。
    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレスに8bitのデータを書き込みます。
        アドレスはデバイス内でのオフセットとして扱われます。
        """
        pass

# @intent:responsibility 基本的なRAMデバイスの機能を提供します。
class RAM(Device):
    """
    CHIP-8 の 4KB 主記憶などに使用する RAM デバイス。
    """
    # @intent:responsibility 指定されたサイズのメモリ領域を初期化します。
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def _check_address(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise AddressOutOfRangeError(
                f"Address {address:#06x} out of bounds for RAM of size {self._size}.", address
            )

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read(self, address: int) -> int:
        self._check_address(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    def write(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility メモリ全体をゼロで埋めます。
    def clear(self) -> None:
        self._memory[:] = bytes(self._size)

    # @intent:responsibility RAMのサイズを返します。
    def get_size(self) -> int:
        return self._size

# @intent:responsibility メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
class Bus:
    """
    メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
    """
    # @intent:responsibility 空のメモリマップを初期化します。
    def __init__(self):
        # メモリマップ: (start_address, end_address, device) のタプルリスト
        self._memory_map: List[Tuple[int, int, Device]] = []

    # @intent:responsibility 指定されたアドレス範囲にデバイスを登録します。
    # @intent:pre-condition start_address <= end_addressかつ非負であり、deviceはDeviceのインスタンスである必要があります。
    # @intent:rationale アドレス範囲の重複チェックは行いません。これはBusの責務ではなく、システム設計の層で管理されるべきと判断しました。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        """
        指定されたアドレス範囲にデバイスを登録します。
        RAMを登録する場合、そのサイズはアドレス範囲と一致する必要があります。
        """
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")

        if isinstance(device, RAM):
            expected_size = end_address - start_address + 1
            if device.get_size() != expected_size:
                raise ValueError(
                    f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                    f"the specified address range size ({expected_size} bytes)."
                )

        self._memory_map.append((start_address, end_address, device))

    # @intent:responsibility 指定されたアドレスに対応するデバイスとオフセットを検索します。
    # @intent:post-condition デバイスが見つからなかった場合、AddressOutOfRangeErrorを発生させます。
    def _find_device(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise AddressOutOfRangeError(f"Address {address:#06x} not mapped to any device.", address)

    # @intent:responsibility 指定されたアドレス範囲が全てマップ済みであることを確認します。
    # @intent:rationale 複数バイトを書き込む命令が途中で失敗し、部分的な書き込みが残ることを防ぎます。
    def check_range(self, address: int, length: int) -> None:
        """
        address から length バイトの領域が全てアクセス可能か検査します。
        不可能な場合は AddressOutOfRangeError を送出します。
        """
        # 途中に未マップの穴がないことも確認する
        for offset in range(length):
            self._find_device(address + offset)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read(self, address: int) -> int:
        device, offset = self._find_device(address)
        return device.read(offset)

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    def write(self, address: int, data: int) -> None:
        device, offset = self._find_device(address)
        device.write(offset, data)

    # @intent:utility_function 2バイトをビッグエンディアン（先頭バイトが上位）で読み込みます。
    def read_word(self, address: int) -> int:
        """Big-endian 16-bit read."""
        return (self.read(address) << 8) | self.read(address + 1)

    # @intent:responsibility バイト列を指定アドレスから連続して書き込みます。
    # @intent:pre-condition 書き込み範囲全体がマップされている必要があります（事前に検査され、部分的な書き込みは発生しません）。
    def load(self, address: int, data: bytes) -> None:
        """
        プログラムやフォントなどのバイト列を、address から順に書き込みます。
        """
        self.check_range(address, len(data))
        for i, byte in enumerate(data):
            self.write(address + i, byte)

    # @intent:responsibility 登録済みの全RAMデバイスをゼロクリアします。
    def clear(self) -> None:
        for _, _, device in self._memory_map:
            if isinstance(device, RAM):
                device.clear()
