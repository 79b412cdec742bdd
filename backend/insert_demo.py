"""插入演示数据"""
import asyncio
from sqlalchemy import text

from app.core.config import settings
from app.db.init_db import ensure_tables_exist
from app.db.session import create_engine_from_settings


async def insert_demo():
    engine = create_engine_from_settings(settings)
    await ensure_tables_exist(engine)
    try:
        async with engine.begin() as conn:
            # 检查是否已有数据
            result = await conn.execute(text('SELECT COUNT(*) FROM Product'))
            count = result.scalar()
            if count > 0:
                print('已存在数据，跳过')
                return

            # 插入商品
            await conn.execute(text("""
                INSERT INTO Product (IdProduct, Name, Description, Price)
                VALUES
                    (1, 'Abacavir', 'Antiretroviral, 300 mg', 9.99),
                    (2, 'Acyclovir', 'Antiviral, 400 mg', 25.50),
                    (3, 'Allopurinol', 'Gout treatment, 100 mg', 4.20)
            """))
            print('✓ 插入商品')

            # 插入仓库
            await conn.execute(text("""
                INSERT INTO Warehouse (IdWarehouse, Name, Address)
                VALUES
                    (1, 'Main', 'Kwiatowa 1'),
                    (2, 'North', 'Lesna 12')
            """))
            print('✓ 插入仓库')

            # 插入订单（时间格式与 SQLAlchemy DateTime 一致）
            await conn.execute(text("""
                INSERT INTO "Order" (IdOrder, IdProduct, Amount, CreatedAt)
                VALUES
                    (7, 1, 3, '2024-01-01 00:00:00.000000'),
                    (8, 2, 10, '2024-02-15 09:30:00.000000'),
                    (9, 3, 5, '2024-03-20 14:00:00.000000')
            """))
            print('✓ 插入订单')
            print('演示数据插入完成!')
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(insert_demo())
