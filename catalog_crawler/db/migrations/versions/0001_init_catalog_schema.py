from yoyo import step

__depends__ = {}

steps = [
    # Category tree; slug, full_slug and level are maintained by the crawler
    step(
        """
        CREATE TABLE categories (
            id SERIAL PRIMARY KEY,
            parent_id INTEGER REFERENCES categories(id),
            name VARCHAR(255) NOT NULL UNIQUE,
            slug VARCHAR(255) NOT NULL,
            full_slug TEXT NOT NULL,
            level INTEGER NOT NULL DEFAULT 1,
            external_id VARCHAR(100),
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        );
        CREATE INDEX idx_categories_parent_id ON categories(parent_id);
        CREATE INDEX idx_categories_full_slug ON categories(full_slug);
        """,
        """
        DROP INDEX IF EXISTS idx_categories_full_slug;
        DROP INDEX IF EXISTS idx_categories_parent_id;
        DROP TABLE IF EXISTS categories;
        """
    ),

    step(
        """
        CREATE TABLE brands (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL UNIQUE,
            slug VARCHAR(255) NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        );
        """,
        "DROP TABLE IF EXISTS brands;"
    ),

    # external_id is nullable; Postgres lets several NULLs through the unique constraint
    step(
        """
        CREATE TABLE products (
            id SERIAL PRIMARY KEY,
            category_id INTEGER NOT NULL REFERENCES categories(id),
            brand_id INTEGER REFERENCES brands(id),
            external_id VARCHAR(100) UNIQUE,
            name VARCHAR(500) NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            price NUMERIC(12, 2),
            original_price NUMERIC(12, 2),
            sku VARCHAR(100),
            is_available BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        );
        CREATE INDEX idx_products_category_id ON products(category_id);
        CREATE INDEX idx_products_brand_id ON products(brand_id);
        """,
        """
        DROP INDEX IF EXISTS idx_products_brand_id;
        DROP INDEX IF EXISTS idx_products_category_id;
        DROP TABLE IF EXISTS products;
        """
    ),

    step(
        """
        CREATE TABLE images (
            id SERIAL PRIMARY KEY,
            product_id INTEGER NOT NULL REFERENCES products(id) ON DELETE CASCADE,
            url TEXT NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        );
        CREATE INDEX idx_images_product_id ON images(product_id);
        """,
        """
        DROP INDEX IF EXISTS idx_images_product_id;
        DROP TABLE IF EXISTS images;
        """
    ),

    step(
        """
        CREATE TABLE attribute_groups (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL UNIQUE,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE attributes (
            id SERIAL PRIMARY KEY,
            attribute_group_id INTEGER NOT NULL REFERENCES attribute_groups(id),
            name VARCHAR(255) NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            CONSTRAINT unique_attribute_name_within_group UNIQUE (name, attribute_group_id)
        );
        """,
        """
        DROP TABLE IF EXISTS attributes;
        DROP TABLE IF EXISTS attribute_groups;
        """
    ),

    step(
        """
        CREATE TABLE product_attributes (
            id SERIAL PRIMARY KEY,
            product_id INTEGER NOT NULL REFERENCES products(id) ON DELETE CASCADE,
            attribute_id INTEGER NOT NULL REFERENCES attributes(id),
            value TEXT NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        );
        CREATE INDEX idx_product_attributes_product_id ON product_attributes(product_id);
        """,
        """
        DROP INDEX IF EXISTS idx_product_attributes_product_id;
        DROP TABLE IF EXISTS product_attributes;
        """
    ),
]
